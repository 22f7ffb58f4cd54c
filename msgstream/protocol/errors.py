# msgstream/protocol/errors.py
from __future__ import annotations

from typing import Optional

from msgstream.core.errors import MsgStreamError


class ProtocolError(MsgStreamError):
    """Base for framing failures. The stream position is unreliable afterwards."""
    code = "protocol_error"


class DataError(ProtocolError):
    """
    Malformed or desynchronized framing.

    Examples:
      - header size byte disagrees with the receiver's capacity
      - end of stream in the middle of a header or payload
      - empty or inaccessible byte view
    """
    code = "data_error"

    def __init__(self, message: str = "bad data", **kwargs):
        super().__init__(message, **kwargs)


class WriteFailed(ProtocolError):
    code = "write_failed"

    def __init__(self, cause: Optional[BaseException] = None, message: Optional[str] = None):
        if message is None:
            message = f"write failed: {cause}" if cause is not None else "write failed"
        super().__init__(message, details={"cause": repr(cause)} if cause is not None else None)
        self.cause = cause


class ReadFailed(ProtocolError):
    code = "read_failed"

    def __init__(self, cause: Optional[BaseException] = None, message: Optional[str] = None):
        if message is None:
            message = f"read failed: {cause}" if cause is not None else "read failed"
        super().__init__(message, details={"cause": repr(cause)} if cause is not None else None)
        self.cause = cause


class MessageTooBig(ProtocolError):
    code = "message_too_big"

    def __init__(self, msg_size: int, buf_size: int):
        super().__init__(
            f"message of {msg_size} bytes does not fit a {buf_size} byte buffer",
            hint="Raise the receive buffer size negotiated with the peer.",
            details={"msg_size": int(msg_size), "buf_size": int(buf_size)},
        )
        self.msg_size = int(msg_size)
        self.buf_size = int(buf_size)
