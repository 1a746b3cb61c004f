from __future__ import annotations

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    # Docker daemon
    docker_api_version: str = os.getenv("SWARMLENS_DOCKER_API_VERSION", "1.39")
    # Unset: resolve DOCKER_HOST / DOCKER_TLS_VERIFY / DOCKER_CERT_PATH like the docker CLI.
    docker_base_url: str | None = os.getenv("SWARMLENS_DOCKER_BASE_URL")
    docker_timeout_s: int = _env_int("SWARMLENS_DOCKER_TIMEOUT_S", 60)
    check_daemon_on_startup: bool = _env_bool("SWARMLENS_CHECK_DAEMON", True)

    # HTTP
    host: str = os.getenv("SWARMLENS_HOST", "0.0.0.0")
    port: int = _env_int("SWARMLENS_PORT", 8888)

    log_level: str = os.getenv("SWARMLENS_LOG_LEVEL", "INFO")


settings = Settings()
