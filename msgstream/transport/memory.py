# msgstream/transport/memory.py
from __future__ import annotations

from typing import Optional

from .base import Transport
from .errors import TransportIOError


class MemoryTransport(Transport):
    """
    In-memory transport: writes append to an output buffer, reads consume an
    input buffer.

    max_chunk caps how many bytes a single read/write moves, which mimics a
    stream that returns short. In loopback mode reads consume what was written.
    """

    def __init__(self, data: bytes = b"", *, max_chunk: Optional[int] = None, loopback: bool = False):
        if max_chunk is not None and max_chunk <= 0:
            raise ValueError("max_chunk must be positive")
        self.max_chunk = max_chunk
        self.loopback = bool(loopback)
        self._input = bytearray(data)
        self._output = bytearray()
        self._open = False

    def open(self) -> None:
        self._open = True

    def close(self) -> None:
        self._open = False

    def is_open(self) -> bool:
        return self._open

    # ---------------- buffers ----------------
    def feed(self, data: bytes) -> None:
        """Append bytes for later reads."""
        self._input.extend(data)

    def output_data(self) -> bytes:
        return bytes(self._output)

    def copy_output_to_input(self) -> None:
        """Replace pending input with everything written so far."""
        self._input = bytearray(self._output)

    @property
    def pending(self) -> int:
        return len(self._source)

    @property
    def _source(self) -> bytearray:
        return self._output if self.loopback else self._input

    # ---------------- I/O ----------------
    def _limit(self, n: int) -> int:
        return n if self.max_chunk is None else min(n, self.max_chunk)

    def read(self, n: int) -> bytes:
        if not self._open:
            self.last_error = TransportIOError("read while transport not open")
            raise self.last_error

        src = self._source
        k = self._limit(n)
        chunk = bytes(src[:k])
        del src[:k]
        return chunk

    def write(self, data: bytes) -> int:
        if not self._open:
            self.last_error = TransportIOError("write while transport not open")
            raise self.last_error

        k = self._limit(len(data))
        self._output.extend(memoryview(data)[:k])
        return k

    def flush(self) -> None:
        if not self._open:
            self.last_error = TransportIOError("flush while transport not open")
            raise self.last_error
