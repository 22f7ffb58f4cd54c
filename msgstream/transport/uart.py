# msgstream/transport/uart.py
"""
Serial line transport for framed messages (pyserial).

The framing core loops over partial reads, so read(n) hands back whatever
has arrived as soon as the first byte lands instead of waiting for all n.
An empty result means `timeout` expired with nothing received, which the
receiver reports as a frame cut short.
"""
from __future__ import annotations

from typing import Optional

import serial
from serial import SerialException

from .base import Transport
from .errors import TransportIOError, TransportOpenError


class UARTTransport(Transport):
    """Byte stream over one serial port. `timeout=None` blocks indefinitely."""

    def __init__(self, port: str, baudrate: int = 115200, timeout: Optional[float] = 1.0):
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout
        self.ser: Optional[serial.Serial] = None

    def open(self) -> None:
        try:
            ser = serial.Serial(
                self.port,
                baudrate=self.baudrate,
                timeout=self.timeout,
                write_timeout=self.timeout,
            )
            # stale bytes from before the open would desync the first header
            ser.reset_input_buffer()
            ser.reset_output_buffer()
        except SerialException as e:
            self.last_error = e
            self.ser = None
            raise TransportOpenError(f"could not open serial port {self.port!r}: {e}") from None
        self.ser = ser

    def close(self) -> None:
        ser, self.ser = self.ser, None
        if ser is not None:
            ser.close()

    def is_open(self) -> bool:
        return self.ser is not None and self.ser.is_open

    def _port(self, op: str) -> serial.Serial:
        if self.ser is None:
            self.last_error = TransportIOError(f"{op} while transport not open")
            raise self.last_error
        return self.ser

    def _lost(self, op: str, e: SerialException) -> TransportIOError:
        self.last_error = e
        self.ser = None
        return TransportIOError(f"UART {op} failed on {self.port!r}: {e}")

    def read(self, n: int) -> bytes:
        ser = self._port("read")
        try:
            head = ser.read(1)
            if not head or n <= 1:
                return head
            queued = min(n - 1, ser.in_waiting)
            return head + ser.read(queued) if queued else head
        except SerialException as e:
            raise self._lost("read", e) from None

    def write(self, data: bytes) -> int:
        ser = self._port("write")
        try:
            return ser.write(data)
        except SerialException as e:
            raise self._lost("write", e) from None

    def flush(self) -> None:
        ser = self._port("flush")
        try:
            ser.flush()
        except SerialException as e:
            raise self._lost("flush", e) from None
