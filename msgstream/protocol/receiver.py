# msgstream/protocol/receiver.py
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from msgstream.transport.base import Transport

from .byteview import writable_view
from .errors import DataError
from .header import decode_header, header_size
from .reliable_io import read_fully


class MsgReceiver(ABC):
    @abstractmethod
    def receive(self, buf: Any) -> int: ...


class StreamMsgReceiver(MsgReceiver):
    """
    Reads one frame per receive() call into a caller-owned buffer.

    len(buf) is the declared capacity: it fixes the expected header width,
    so both peers must agree on it. Returns the payload length; bytes of
    `buf` past that length are left as they were.
    """

    def __init__(self, transport: Transport, *, logger: Optional[logging.Logger] = None):
        self.transport = transport
        self._log = logger or logging.getLogger(__name__)

    def receive(self, buf: Any) -> int:
        with writable_view(buf) as view:
            capacity = len(view)
            if capacity == 0:
                raise DataError("cannot receive into an empty buffer")

            size = header_size(capacity)
            raw = bytearray(size)
            read_fully(self.transport, memoryview(raw))

            hdr = decode_header(raw)
            if hdr.declared_size != size:
                self._log.warning(
                    "HEADER_MISMATCH declared=%d expected=%d capacity=%d",
                    hdr.declared_size,
                    size,
                    capacity,
                )
                raise DataError(
                    f"header size mismatch: {hdr.declared_size} != {size}",
                    hint="Stream desynchronized or peers disagree on the buffer size.",
                    details={"declared": hdr.declared_size, "expected": size},
                )

            if hdr.payload_len > capacity:
                self._log.warning(
                    "PAYLOAD_TOO_LONG payload_len=%d capacity=%d",
                    hdr.payload_len,
                    capacity,
                )
                raise DataError(
                    f"payload length {hdr.payload_len} exceeds buffer capacity {capacity}",
                    details={"payload_len": hdr.payload_len, "capacity": capacity},
                )

            read_fully(self.transport, view[: hdr.payload_len])

        self._log.debug("FRAME_RECEIVED header_size=%d payload_len=%d", size, hdr.payload_len)
        return hdr.payload_len

    def open(self) -> None:
        self.transport.open()

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "StreamMsgReceiver":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
