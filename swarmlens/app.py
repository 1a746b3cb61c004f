from __future__ import annotations

import logging
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from . import __version__, docker_ops
from .errors import DaemonError
from .summaries import ContainerSummary, ErrorBody, ServiceSummary, summarize_containers, summarize_services

logger = logging.getLogger(__name__)


def get_docker(request: Request) -> Any:
    """The docker client created at startup, shared read-only by all handlers."""
    return request.app.state.docker


def create_app(docker_client: Any) -> FastAPI:
    """Build the HTTP facade bound to one docker client.

    Daemon failures raised by any handler are translated into a JSON error
    body with the status code of the failure kind; the server keeps running.
    """
    app = FastAPI(title="swarmlens", version=__version__)
    app.state.docker = docker_client

    @app.exception_handler(DaemonError)
    async def daemon_error_handler(request: Request, exc: DaemonError) -> JSONResponse:
        logger.error("%s %s failed (%s): %s", request.method, request.url.path, exc.kind, exc)
        body = ErrorBody(error=exc.kind, detail=str(exc) or exc.kind)
        return JSONResponse(status_code=exc.status_code, content=body.model_dump())

    @app.get("/", response_class=PlainTextResponse)
    def home() -> str:
        return "hey"

    @app.get("/health")
    def health(client: Any = Depends(get_docker)) -> JSONResponse:
        if docker_ops.ping(client):
            return JSONResponse({"status": "healthy"})
        return JSONResponse({"status": "unhealthy"}, status_code=503)

    @app.get("/containers", response_model=list[ContainerSummary])
    def containers(client: Any = Depends(get_docker)) -> list[ContainerSummary]:
        return summarize_containers(docker_ops.list_containers(client))

    @app.get("/services", response_model=list[ServiceSummary])
    def services(client: Any = Depends(get_docker)) -> list[ServiceSummary]:
        svc = docker_ops.list_services(client)
        tasks = docker_ops.list_tasks(client)
        return summarize_services(svc, tasks)

    return app
