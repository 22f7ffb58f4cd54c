# msgstream/protocol/sender.py
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from msgstream.transport.base import Transport
from msgstream.transport.errors import TransportError

from .byteview import readable_view
from .errors import DataError, MessageTooBig, WriteFailed
from .header import encode_header, header_size
from .reliable_io import write_fully


class MsgSender(ABC):
    @abstractmethod
    def send(self, data: Any, recv_buf_size: int) -> None: ...


class StreamMsgSender(MsgSender):
    """
    Writes one frame per send() call: size byte, little-endian length, payload.

    The header width comes from `recv_buf_size`, the capacity the peer
    declared for its receive buffer, not from the payload length.
    Concurrent send() calls on one transport must be serialized by the caller.
    """

    def __init__(self, transport: Transport, *, logger: Optional[logging.Logger] = None):
        self.transport = transport
        self._log = logger or logging.getLogger(__name__)

    def send(self, data: Any, recv_buf_size: int) -> None:
        size = header_size(recv_buf_size)

        with readable_view(data) as view:
            n = len(view)
            if n == 0:
                raise DataError("cannot send an empty payload")
            if n > recv_buf_size:
                raise MessageTooBig(n, recv_buf_size)

            header = encode_header(size, n)
            write_fully(self.transport, memoryview(header))
            write_fully(self.transport, view)

        try:
            self.transport.flush()
        except (TransportError, OSError) as e:
            raise WriteFailed(e) from e

        self._log.debug("FRAME_SENT header_size=%d payload_len=%d", size, n)

    def open(self) -> None:
        self.transport.open()

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "StreamMsgSender":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
