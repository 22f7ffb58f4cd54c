# msgstream/protocol/stream.py
from __future__ import annotations

import logging
import threading
from typing import Any, Optional

from msgstream.core.errors import MsgStreamError, StreamConnectError
from msgstream.transport.base import Transport
from msgstream.transport.errors import TransportOpenError

from .receiver import StreamMsgReceiver
from .sender import StreamMsgSender


class MsgStream:
    """
    Duplex message stream over one transport.

    Both directions use `recv_buf_size` as the negotiated capacity unless a
    send overrides it. Sends hold one lock and receives another, so threads
    sharing a MsgStream never interleave partial frames.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        recv_buf_size: int,
        logger: Optional[logging.Logger] = None,
    ):
        self.transport = transport
        self.recv_buf_size = int(recv_buf_size)
        self._log = logger or logging.getLogger(__name__)

        self.sender = StreamMsgSender(transport, logger=self._log)
        self.receiver = StreamMsgReceiver(transport, logger=self._log)

        self._tx_lock = threading.Lock()
        self._rx_lock = threading.Lock()

    # ---------------- lifecycle ----------------
    def open(self) -> None:
        try:
            self.transport.open()
        except TransportOpenError as e:
            raise StreamConnectError(
                "Could not open the transport.",
                hint=str(e),
                details={"transport": type(self.transport).__name__},
            ) from None

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "MsgStream":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ---------------- messages ----------------
    def send(self, data: Any, recv_buf_size: Optional[int] = None) -> None:
        cap = self.recv_buf_size if recv_buf_size is None else int(recv_buf_size)
        with self._tx_lock:
            self.sender.send(data, cap)

    def receive(self, buf: Any) -> int:
        with self._rx_lock:
            return self.receiver.receive(buf)

    def receive_bytes(self) -> bytes:
        """
        Receive one message into a fresh buffer of recv_buf_size bytes.

        Suits capacities that fit in memory; for very large negotiated sizes
        pass a caller-owned buffer to receive() instead.
        """
        try:
            buf = bytearray(self.recv_buf_size)
        except (MemoryError, OverflowError):
            raise MsgStreamError(
                f"Cannot allocate a {self.recv_buf_size} byte receive buffer.",
                hint="Call receive() with a caller-owned buffer.",
                details={"recv_buf_size": self.recv_buf_size},
            ) from None
        n = self.receive(buf)
        del buf[n:]
        return bytes(buf)
