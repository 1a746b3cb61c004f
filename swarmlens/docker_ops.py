from __future__ import annotations

import logging
from typing import Any, Callable

import docker
import requests
from docker.errors import APIError, DockerException

from .errors import DaemonQueryError, DaemonUnavailable, MalformedDaemonResponse
from .settings import Settings

logger = logging.getLogger(__name__)


def connect(cfg: Settings) -> docker.DockerClient:
    """Create the single docker client shared by every request.

    The client is pinned to `cfg.docker_api_version`. Raises DaemonUnavailable
    when the client cannot be built or (if enabled) the daemon does not answer
    a ping; callers treat that as fatal.
    """
    try:
        if cfg.docker_base_url:
            client = docker.DockerClient(
                base_url=cfg.docker_base_url,
                version=cfg.docker_api_version,
                timeout=cfg.docker_timeout_s,
            )
        else:
            client = docker.from_env(version=cfg.docker_api_version, timeout=cfg.docker_timeout_s)
    except (DockerException, requests.exceptions.RequestException) as e:
        raise DaemonUnavailable(f"Cannot create docker client: {e}") from e

    if cfg.check_daemon_on_startup:
        try:
            client.ping()
        except (DockerException, requests.exceptions.RequestException) as e:
            client.close()
            raise DaemonUnavailable(f"Docker daemon did not answer ping: {e}") from e

    logger.info(
        "Connected to docker daemon at %s (API %s)",
        client.api.base_url,
        client.api.api_version,
    )
    return client


def ping(client: Any) -> bool:
    try:
        return bool(client.ping())
    except (DockerException, requests.exceptions.RequestException) as e:
        logger.warning("Docker ping failed: %s", e)
        return False


def _query(what: str, call: Callable[[], Any]) -> list[dict[str, Any]]:
    try:
        records = call()
    except APIError as e:
        logger.warning("Docker daemon rejected %s query: %s", what, e.explanation or e)
        raise DaemonQueryError(f"Docker daemon rejected {what} query: {e.explanation or e}") from e
    except (DockerException, requests.exceptions.RequestException) as e:
        logger.warning("Docker daemon unreachable during %s query: %s", what, e)
        raise DaemonUnavailable(f"Docker daemon unreachable during {what} query: {e}") from e

    if not isinstance(records, list):
        raise MalformedDaemonResponse(f"Unexpected {what} payload: {type(records).__name__}")
    return records


def list_containers(client: Any) -> list[dict[str, Any]]:
    """Raw records for running containers (engine default, no filters)."""
    return _query("container", lambda: client.api.containers())


def list_services(client: Any) -> list[dict[str, Any]]:
    return _query("service", lambda: client.api.services())


def list_tasks(client: Any) -> list[dict[str, Any]]:
    """Raw records for every task of every service."""
    return _query("task", lambda: client.api.tasks())
