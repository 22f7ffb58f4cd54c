from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional


class Transport(ABC):
    """
    Abstract byte-stream transport (memory, file/pipe, TCP, UART, etc.).

    Contract:
      - open()/close() manage the underlying connection.
      - read(n) returns 0..n bytes. b"" means the stream ended (or, for
        timeout-based drivers, that nothing arrived in time).
      - readinto(buf) is read() into a caller-owned buffer; returns the count.
      - write(data) returns the number of bytes accepted, which may be fewer
        than len(data).
      - flush() forces pending output to be transmitted.
      - last_error holds the most recent native failure, if any.
    """

    last_error: Optional[BaseException] = None

    @abstractmethod
    def open(self) -> None: ...

    @abstractmethod
    def close(self) -> None: ...

    @abstractmethod
    def read(self, n: int) -> bytes: ...

    @abstractmethod
    def write(self, data: bytes) -> int: ...

    @abstractmethod
    def flush(self) -> None: ...

    def readinto(self, buf: memoryview) -> int:
        data = self.read(len(buf))
        n = len(data)
        buf[:n] = data
        return n

    def __enter__(self) -> "Transport":
        self.open()
        return self

    def __exit__(self, exc_type: type | None, exc_val: BaseException | None, exc_tb: Any) -> None:
        self.close()
