# msgstream/transport/tcp.py
from __future__ import annotations

import logging
import socket
from typing import Optional

from .base import Transport
from .errors import TransportIOError, TransportOpenError, TransportTimeout

log = logging.getLogger(__name__)


class TCPTransport(Transport):
    """
    TCP stream transport.

    Client mode connects to host:port. With listen=True, open() binds
    host:port and blocks until exactly one peer connects; the listening
    socket is closed once the peer is accepted.

    timeout (seconds) applies to connect/accept and to every read/write;
    None blocks forever.
    """

    def __init__(
        self,
        host: str = "127.0.0.1",
        port: int = 0,
        timeout: Optional[float] = None,
        listen: bool = False,
    ):
        self.host = host
        self.port = int(port)
        self.timeout = timeout
        self.listen = bool(listen)
        self.sock: Optional[socket.socket] = None
        self.peer: Optional[tuple] = None

    def open(self) -> None:
        try:
            if self.listen:
                self.sock, self.peer = self._accept_one()
            else:
                self.sock = socket.create_connection((self.host, self.port), timeout=self.timeout)
                self.peer = (self.host, self.port)
            self.sock.settimeout(self.timeout)
        except OSError as e:
            self.last_error = e
            self.sock = None
            raise TransportOpenError(f"could not open TCP {self.host}:{self.port}: {e}") from None

        log.info("TCP_OPEN peer=%s listen=%s", self.peer, self.listen)

    def _accept_one(self) -> tuple[socket.socket, tuple]:
        with socket.create_server((self.host, self.port)) as server:
            server.settimeout(self.timeout)
            return server.accept()

    def close(self) -> None:
        if self.sock is not None:
            try:
                self.sock.close()
            finally:
                self.sock = None

    def is_open(self) -> bool:
        return self.sock is not None

    def read(self, n: int) -> bytes:
        buf = bytearray(n)
        k = self.readinto(memoryview(buf))
        return bytes(buf[:k])

    def readinto(self, buf: memoryview) -> int:
        if self.sock is None:
            self.last_error = TransportIOError("read while transport not open")
            raise self.last_error

        try:
            return self.sock.recv_into(buf)
        except socket.timeout as e:
            self.last_error = e
            raise TransportTimeout(f"TCP read timed out after {self.timeout}s") from None
        except OSError as e:
            self.last_error = e
            self.sock = None
            raise TransportIOError(f"TCP read failed: {e}") from None

    def write(self, data: bytes) -> int:
        if self.sock is None:
            self.last_error = TransportIOError("write while transport not open")
            raise self.last_error

        try:
            return self.sock.send(data)
        except socket.timeout as e:
            self.last_error = e
            raise TransportTimeout(f"TCP write timed out after {self.timeout}s") from None
        except OSError as e:
            self.last_error = e
            self.sock = None
            raise TransportIOError(f"TCP write failed: {e}") from None

    def flush(self) -> None:
        if self.sock is None:
            self.last_error = TransportIOError("flush while transport not open")
            raise self.last_error
