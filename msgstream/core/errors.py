# msgstream/core/errors.py
from __future__ import annotations


class MsgStreamError(Exception):
    """
    Base class for all expected operational errors in msgstream.
    """

    #: Stable machine-readable identifier (for CLI exit mapping, logs, etc.)
    code: str = "unknown"

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Configuration / setup errors (no I/O yet)
# ---------------------------------------------------------------------------

class TransportConfigError(MsgStreamError):
    """
    Transport configuration is invalid or inconsistent with the catalog.

    Examples:
      - unknown transport type id or label
      - unknown driver key
      - invalid / missing transport parameters
      - catalog entry does not match the transport constructor
    """
    code = "transport_config_error"


# ---------------------------------------------------------------------------
# Connection lifecycle errors
# ---------------------------------------------------------------------------

class StreamConnectError(MsgStreamError):
    """
    Transport could not be opened.

    Examples:
      - serial port not found
      - TCP connection refused
      - file not found / permission denied
    """
    code = "stream_connect_error"
