from __future__ import annotations

import logging
import sys

import uvicorn

from .app import create_app
from .docker_ops import connect
from .errors import DaemonUnavailable
from .settings import Settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

logger = logging.getLogger(__name__)


def resolve_log_level(level_name: str) -> int:
    """Numeric level for a stdlib level name; unknown names mean INFO."""
    level = logging.getLevelName(level_name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level_name: str = "INFO") -> None:
    logging.basicConfig(level=resolve_log_level(level_name), format=LOG_FORMAT, stream=sys.stderr, force=True)


def serve(cfg: Settings) -> int:
    """Connect to the daemon, then serve HTTP until the process is stopped.

    Returns the process exit code: 1 when the daemon cannot be reached at
    startup, 0 after a normal shutdown.
    """
    try:
        client = connect(cfg)
    except DaemonUnavailable as e:
        logger.critical("%s", e)
        logger.critical(
            "Is the docker daemon running and reachable? "
            "Set DOCKER_HOST or SWARMLENS_DOCKER_BASE_URL to point at it."
        )
        return 1

    try:
        app = create_app(client)
        logger.info("Listening on %s:%d", cfg.host, cfg.port)
        uvicorn.run(app, host=cfg.host, port=cfg.port, log_level=resolve_log_level(cfg.log_level))
    finally:
        client.close()
    return 0
