from __future__ import annotations

import pytest

import msgstream.transport.uart as uart_mod
from msgstream.protocol.sender import StreamMsgSender
from msgstream.protocol.receiver import StreamMsgReceiver
from msgstream.transport.errors import TransportIOError, TransportOpenError


class FakeSerial:
    def __init__(self, port, baudrate, timeout, write_timeout):
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout
        self.write_timeout = write_timeout
        self.is_open = True

        self.rx = bytearray()
        self.tx = bytearray()
        self._write_limit = None
        self._raise_on_read = None
        self._raise_on_write = None
        self._raise_on_flush = None

        self.reset_in_called = 0
        self.reset_out_called = 0
        self.flush_called = 0
        self.close_called = 0

    @property
    def in_waiting(self) -> int:
        return len(self.rx)

    def reset_input_buffer(self):
        self.reset_in_called += 1

    def reset_output_buffer(self):
        self.reset_out_called += 1

    def read(self, n: int) -> bytes:
        if self._raise_on_read is not None:
            raise self._raise_on_read
        chunk = bytes(self.rx[:n])
        del self.rx[:n]
        return chunk

    def write(self, data) -> int:
        if self._raise_on_write is not None:
            raise self._raise_on_write
        n = len(data) if self._write_limit is None else min(len(data), self._write_limit)
        self.tx.extend(bytes(data[:n]))
        return n

    def flush(self) -> None:
        self.flush_called += 1
        if self._raise_on_flush is not None:
            raise self._raise_on_flush

    def close(self) -> None:
        self.close_called += 1
        self.is_open = False


@pytest.fixture
def fake_serial(monkeypatch):
    s = FakeSerial("COM1", 115200, 1.0, 1.0)
    monkeypatch.setattr(uart_mod.serial, "Serial", lambda *a, **k: s)
    return s


def test_open_success_resets_buffers(monkeypatch):
    created = {}

    def fake_serial_ctor(port, baudrate, timeout, write_timeout):
        s = FakeSerial(port, baudrate, timeout, write_timeout)
        created["ser"] = s
        return s

    monkeypatch.setattr(uart_mod.serial, "Serial", fake_serial_ctor)

    t = uart_mod.UARTTransport("COM5", baudrate=9600, timeout=0.1)
    t.open()

    assert t.ser is created["ser"]
    assert t.is_open() is True
    assert created["ser"].baudrate == 9600
    assert created["ser"].write_timeout == 0.1
    assert created["ser"].reset_in_called == 1
    assert created["ser"].reset_out_called == 1


def test_open_serial_exception_raises_transport_open_error(monkeypatch):
    def fake_serial_ctor(*a, **k):
        raise uart_mod.SerialException("no port")

    monkeypatch.setattr(uart_mod.serial, "Serial", fake_serial_ctor)

    t = uart_mod.UARTTransport("COM404")
    with pytest.raises(TransportOpenError):
        t.open()

    assert t.ser is None
    assert isinstance(t.last_error, uart_mod.SerialException)


@pytest.mark.parametrize("call", [lambda t: t.read(1), lambda t: t.write(b"\x00"), lambda t: t.flush()])
def test_io_when_not_open_raises(call):
    t = uart_mod.UARTTransport("COM1")
    with pytest.raises(TransportIOError) as ei:
        call(t)
    assert t.last_error is ei.value


def test_read_returns_first_byte_plus_queued_bytes(fake_serial):
    fake_serial.rx.extend(b"\x01\x02\x03")

    t = uart_mod.UARTTransport("COM1")
    t.open()

    assert t.read(2) == b"\x01\x02"
    assert t.read(5) == b"\x03"


def test_read_does_not_wait_for_the_full_count(fake_serial):
    fake_serial.rx.extend(b"\x07")

    t = uart_mod.UARTTransport("COM1")
    t.open()

    assert t.read(8) == b"\x07"


def test_read_timeout_returns_empty(fake_serial):
    t = uart_mod.UARTTransport("COM1")
    t.open()
    assert t.read(4) == b""


def test_read_serial_exception_clears_ser_and_raises(fake_serial):
    fake_serial._raise_on_read = uart_mod.SerialException("read fail")

    t = uart_mod.UARTTransport("COM1")
    t.open()

    with pytest.raises(TransportIOError):
        t.read(1)

    assert t.ser is None
    assert isinstance(t.last_error, uart_mod.SerialException)


def test_write_returns_bytes_written(fake_serial):
    fake_serial._write_limit = 2

    t = uart_mod.UARTTransport("COM1")
    t.open()

    assert t.write(b"abcd") == 2


def test_write_serial_exception_clears_ser_and_raises(fake_serial):
    fake_serial._raise_on_write = uart_mod.SerialException("write fail")

    t = uart_mod.UARTTransport("COM1")
    t.open()

    with pytest.raises(TransportIOError):
        t.write(b"x")

    assert t.ser is None


def test_flush_serial_exception_clears_ser_and_raises(fake_serial):
    fake_serial._raise_on_flush = uart_mod.SerialException("flush fail")

    t = uart_mod.UARTTransport("COM1")
    t.open()

    with pytest.raises(TransportIOError):
        t.flush()

    assert t.ser is None


def test_close_closes_and_clears(fake_serial):
    t = uart_mod.UARTTransport("COM1")
    t.open()
    t.close()

    assert fake_serial.close_called == 1
    assert t.ser is None


def test_frames_over_uart(fake_serial):
    fake_serial._write_limit = 3

    t = uart_mod.UARTTransport("COM1")
    t.open()
    StreamMsgSender(t).send(b"hello uart", recv_buf_size=64)

    assert bytes(fake_serial.tx) == bytes([2, 10]) + b"hello uart"
    assert fake_serial.flush_called == 1

    fake_serial.rx.extend(fake_serial.tx)
    buf = bytearray(64)
    n = StreamMsgReceiver(t).receive(buf)
    assert bytes(buf[:n]) == b"hello uart"
