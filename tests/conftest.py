from __future__ import annotations

from typing import Any

import pytest


class FakeAPI:
    """Stands in for docker.APIClient: returns canned raw records."""

    base_url = "http+docker://localhost"
    api_version = "1.39"

    def __init__(self, containers=None, services=None, tasks=None) -> None:
        self.container_records: list[dict[str, Any]] = containers or []
        self.service_records: list[dict[str, Any]] = services or []
        self.task_records: list[dict[str, Any]] = tasks or []
        self.fail_with: dict[str, Exception] = {}
        self.calls: list[str] = []

    def _answer(self, what: str, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        self.calls.append(what)
        exc = self.fail_with.get(what)
        if exc is not None:
            raise exc
        return records

    def containers(self) -> list[dict[str, Any]]:
        return self._answer("containers", self.container_records)

    def services(self) -> list[dict[str, Any]]:
        return self._answer("services", self.service_records)

    def tasks(self) -> list[dict[str, Any]]:
        return self._answer("tasks", self.task_records)


class FakeDockerClient:
    def __init__(self, **records: Any) -> None:
        self.api = FakeAPI(**records)
        self.ping_error: Exception | None = None
        self.closed = False

    def ping(self) -> bool:
        if self.ping_error is not None:
            raise self.ping_error
        return True

    def close(self) -> None:
        self.closed = True


def make_service(
    service_id: str,
    name: str,
    *,
    replicas: int | None = None,
    mode: dict[str, Any] | None = None,
    image: str = "nginx:latest@sha256:abc",
    updated_at: str = "2024-05-01T10:00:00.123456789Z",
) -> dict[str, Any]:
    if mode is None:
        mode = {"Replicated": {"Replicas": replicas}} if replicas is not None else {"Global": {}}
    return {
        "ID": service_id,
        "UpdatedAt": updated_at,
        "Spec": {
            "Name": name,
            "Mode": mode,
            "TaskTemplate": {"ContainerSpec": {"Image": image}},
        },
    }


def make_task(service_id: str, state: str = "running") -> dict[str, Any]:
    return {"ServiceID": service_id, "Status": {"State": state}}


@pytest.fixture
def fake_docker() -> FakeDockerClient:
    return FakeDockerClient(
        containers=[
            {"Id": "c1" * 32, "Image": "nginx:latest"},
            {"Id": "c2" * 32, "Image": "redis:7"},
        ],
        services=[
            make_service("svc-web", "web", replicas=3, image="web:1.2@sha256:aaa"),
            make_service("svc-agent", "agent", image="agent:2@sha256:bbb"),
        ],
        tasks=[
            make_task("svc-web"),
            make_task("svc-web"),
            make_task("svc-web", "shutdown"),
            make_task("svc-agent"),
            make_task("svc-agent"),
        ],
    )
