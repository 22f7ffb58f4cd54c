# msgstream/transport/file.py
from __future__ import annotations

import sys
from typing import BinaryIO, Optional

from .base import Transport
from .errors import TransportIOError, TransportOpenError

STDIO = "-"


class FileTransport(Transport):
    """
    Transport over binary files, FIFOs or the process's stdin/stdout.

    `path` is the read side and `out_path` the write side; either may be None
    for a one-way stream, and "-" selects stdin / stdout. Writing appends
    unless truncate=True.
    """

    def __init__(
        self,
        path: Optional[str] = None,
        out_path: Optional[str] = None,
        *,
        truncate: bool = False,
    ):
        if path is None and out_path is None:
            raise ValueError("FileTransport needs path and/or out_path")
        self.path = path
        self.out_path = out_path
        self.truncate = bool(truncate)
        self._rx: Optional[BinaryIO] = None
        self._tx: Optional[BinaryIO] = None

    def open(self) -> None:
        try:
            if self.path is not None:
                self._rx = sys.stdin.buffer if self.path == STDIO else open(self.path, "rb", buffering=0)
            if self.out_path is not None:
                mode = "wb" if self.truncate else "ab"
                self._tx = sys.stdout.buffer if self.out_path == STDIO else open(self.out_path, mode)
        except OSError as e:
            self.last_error = e
            self.close()
            raise TransportOpenError(f"could not open file transport: {e}") from None

    def close(self) -> None:
        rx, tx = self._rx, self._tx
        self._rx = self._tx = None
        try:
            if tx is not None and tx is not sys.stdout.buffer:
                tx.close()
        finally:
            if rx is not None and rx is not sys.stdin.buffer:
                rx.close()

    def is_open(self) -> bool:
        return self._rx is not None or self._tx is not None

    def read(self, n: int) -> bytes:
        buf = bytearray(n)
        k = self.readinto(memoryview(buf))
        return bytes(buf[:k])

    def readinto(self, buf: memoryview) -> int:
        if self._rx is None:
            self.last_error = TransportIOError("read while transport not open for reading")
            raise self.last_error

        try:
            n = self._rx.readinto(buf)
        except OSError as e:
            self.last_error = e
            raise TransportIOError(f"file read failed: {e}") from None
        # None: non-blocking source with nothing available yet
        return 0 if n is None else n

    def write(self, data: bytes) -> int:
        if self._tx is None:
            self.last_error = TransportIOError("write while transport not open for writing")
            raise self.last_error

        try:
            n = self._tx.write(data)
        except OSError as e:
            self.last_error = e
            raise TransportIOError(f"file write failed: {e}") from None
        return 0 if n is None else n

    def flush(self) -> None:
        if self._tx is None:
            return
        try:
            self._tx.flush()
        except OSError as e:
            self.last_error = e
            raise TransportIOError(f"file flush failed: {e}") from None
