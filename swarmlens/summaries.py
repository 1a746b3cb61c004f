from __future__ import annotations

from collections import Counter
from typing import Any, Iterable

from pydantic import BaseModel, Field

from .errors import MalformedDaemonResponse


class ContainerSummary(BaseModel):
    id: str = Field(..., description="Daemon-assigned container id")
    image: str = Field(..., description="Image reference the container was created from")


class ServiceSummary(BaseModel):
    image_name: str = Field(..., description="Service name")
    image_name_hash: str = Field(..., description="Image reference of the task template (usually name:tag@sha256:...)")
    current_replicas: int = Field(..., ge=0, description="Tasks observed in the running state")
    max_replicas: int = Field(..., ge=0, description="Replica target (1 for global services)")
    last_updated: str = Field(..., description="Service UpdatedAt as reported by the daemon")
    is_global: bool = Field(..., description="True for any non-replicated mode")


class ErrorBody(BaseModel):
    error: str
    detail: str


TASK_STATE_RUNNING = "running"


def _require(record: dict[str, Any], key: str, what: str) -> Any:
    value = record.get(key) if isinstance(record, dict) else None
    if value is None:
        raise MalformedDaemonResponse(f"{what} record is missing '{key}'")
    return value


def _require_str(record: dict[str, Any], key: str, what: str) -> str:
    value = _require(record, key, what)
    if not isinstance(value, str):
        raise MalformedDaemonResponse(f"{what} record has a non-string '{key}': {value!r}")
    return value


def summarize_containers(records: Iterable[dict[str, Any]]) -> list[ContainerSummary]:
    out: list[ContainerSummary] = []
    for r in records:
        container_id = _require_str(r, "Id", "Container")
        image = r.get("Image") or ""
        if not isinstance(image, str):
            raise MalformedDaemonResponse(f"Container record has a non-string 'Image': {image!r}")
        out.append(ContainerSummary(id=container_id, image=image))
    return out


def count_running_tasks(tasks: Iterable[dict[str, Any]]) -> dict[str, int]:
    """Map service id -> number of its tasks currently in the running state."""
    counts: Counter[str] = Counter()
    for t in tasks:
        if not isinstance(t, dict):
            continue
        service_id = t.get("ServiceID")
        status = t.get("Status")
        if not isinstance(status, dict):
            continue
        state = status.get("State")
        if service_id and state == TASK_STATE_RUNNING:
            counts[service_id] += 1
    return dict(counts)


def _replica_target(service_name: str, replicated: Any) -> int:
    replicas = replicated.get("Replicas") if isinstance(replicated, dict) else None
    # bool is an int subclass; a JSON true here is still malformed.
    if isinstance(replicas, bool) or not isinstance(replicas, int) or replicas < 0:
        raise MalformedDaemonResponse(
            f"Replicated service '{service_name}' has no valid replica target (got {replicas!r})"
        )
    return replicas


def _optional_dict(record: dict[str, Any], key: str, what: str) -> dict[str, Any]:
    value = record.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise MalformedDaemonResponse(f"{what} has an unreadable '{key}': {value!r}")
    return value


def _task_image(service_name: str, spec: dict[str, Any]) -> str:
    template = _optional_dict(spec, "TaskTemplate", f"Service '{service_name}' spec")
    container = _optional_dict(template, "ContainerSpec", f"Service '{service_name}' task template")
    image = container.get("Image") or ""
    if not isinstance(image, str):
        raise MalformedDaemonResponse(f"Service '{service_name}' has a non-string image: {image!r}")
    return image


def summarize_service(service: dict[str, Any], running: dict[str, int]) -> ServiceSummary:
    """Build one summary from a raw service record and the running-task counts.

    Replicated services report observed vs. configured replicas. Every other
    mode (global, and the job modes) is reported as global with 0/1, without
    counting per-node tasks.
    """
    service_id = _require_str(service, "ID", "Service")
    spec = _require(service, "Spec", "Service")
    name = _require_str(spec, "Name", "Service spec")
    mode = _require(spec, "Mode", f"Service '{name}' spec")
    updated_at = _require(service, "UpdatedAt", f"Service '{name}'")
    if not isinstance(mode, dict):
        raise MalformedDaemonResponse(f"Service '{name}' has an unreadable mode: {mode!r}")

    image = _task_image(name, spec)

    # A null Replicated entry is treated like any other non-replicated mode.
    if mode.get("Replicated") is not None:
        current = running.get(service_id, 0)
        maximum = _replica_target(name, mode["Replicated"])
        is_global = False
    else:
        current = 0
        maximum = 1
        is_global = True

    return ServiceSummary(
        image_name=name,
        image_name_hash=image,
        current_replicas=current,
        max_replicas=maximum,
        last_updated=str(updated_at),
        is_global=is_global,
    )


def summarize_services(
    services: Iterable[dict[str, Any]], tasks: Iterable[dict[str, Any]]
) -> list[ServiceSummary]:
    """Summaries in the daemon's service-list order."""
    running = count_running_tasks(tasks)
    return [summarize_service(s, running) for s in services]
