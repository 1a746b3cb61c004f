from __future__ import annotations


class DaemonError(Exception):
    """Base class for failures talking to the Docker daemon.

    `status_code` and `kind` describe how the HTTP layer reports it.
    """

    status_code = 502
    kind = "daemon_error"


class DaemonUnavailable(DaemonError):
    """The daemon could not be reached (socket missing, refused, timed out)."""

    status_code = 503
    kind = "daemon_unavailable"


class DaemonQueryError(DaemonError):
    """The daemon answered with an API error."""


class MalformedDaemonResponse(DaemonError):
    """A daemon record lacks a field needed to build a summary."""

    kind = "malformed_response"
