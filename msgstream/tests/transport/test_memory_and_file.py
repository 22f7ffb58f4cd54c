from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

import msgstream.transport.file as file_mod
from msgstream.protocol.stream import MsgStream
from msgstream.transport.errors import TransportIOError, TransportOpenError
from msgstream.transport.memory import MemoryTransport


# -----------------------------
# MemoryTransport
# -----------------------------

def test_memory_read_consumes_input():
    t = MemoryTransport(b"abcdef")
    t.open()
    assert t.read(4) == b"abcd"
    assert t.read(4) == b"ef"
    assert t.read(4) == b""


def test_memory_max_chunk_limits_each_call():
    t = MemoryTransport(b"abcdef", max_chunk=2)
    t.open()
    assert t.write(b"12345") == 2
    assert t.read(10) == b"ab"
    assert t.output_data() == b"12"


def test_memory_readinto_default_implementation():
    t = MemoryTransport(b"xyz")
    t.open()
    buf = bytearray(5)
    assert t.readinto(memoryview(buf)[1:]) == 3
    assert buf == bytearray(b"\x00xyz\x00")


def test_memory_feed_appends_input():
    t = MemoryTransport()
    t.open()
    t.feed(b"ab")
    t.feed(b"c")
    assert t.pending == 3
    assert t.read(3) == b"abc"


def test_memory_rejects_io_when_closed():
    t = MemoryTransport(b"a")
    with pytest.raises(TransportIOError):
        t.read(1)
    with pytest.raises(TransportIOError):
        t.write(b"a")
    assert isinstance(t.last_error, TransportIOError)


def test_memory_rejects_bad_max_chunk():
    with pytest.raises(ValueError):
        MemoryTransport(max_chunk=0)


# -----------------------------
# FileTransport
# -----------------------------

def test_file_transport_requires_a_path():
    with pytest.raises(ValueError):
        file_mod.FileTransport()


def test_file_frames_written_then_read_back(tmp_path: Path):
    path = tmp_path / "frames.bin"

    with MsgStream(file_mod.FileTransport(out_path=str(path), truncate=True), recv_buf_size=32) as tx:
        tx.send(b"\x01\x02\x03")
        tx.send(b"second")

    assert path.read_bytes()[:5] == bytes([2, 3, 1, 2, 3])

    with MsgStream(file_mod.FileTransport(path=str(path)), recv_buf_size=32) as rx:
        assert rx.receive_bytes() == b"\x01\x02\x03"
        assert rx.receive_bytes() == b"second"


def test_file_append_mode_keeps_existing_frames(tmp_path: Path):
    path = tmp_path / "log.bin"
    path.write_bytes(bytes([2, 1]) + b"a")

    with MsgStream(file_mod.FileTransport(out_path=str(path)), recv_buf_size=8) as tx:
        tx.send(b"b")

    assert path.read_bytes() == bytes([2, 1]) + b"a" + bytes([2, 1]) + b"b"


def test_file_read_past_end_returns_zero(tmp_path: Path):
    path = tmp_path / "short.bin"
    path.write_bytes(b"ab")

    t = file_mod.FileTransport(path=str(path))
    t.open()
    try:
        assert t.read(10) == b"ab"
        assert t.read(10) == b""
    finally:
        t.close()


def test_file_missing_input_raises_open_error(tmp_path: Path):
    t = file_mod.FileTransport(path=str(tmp_path / "nope.bin"))
    with pytest.raises(TransportOpenError):
        t.open()
    assert not t.is_open()
    assert isinstance(t.last_error, FileNotFoundError)


def test_file_one_way_directions(tmp_path: Path):
    t = file_mod.FileTransport(out_path=str(tmp_path / "out.bin"))
    t.open()
    try:
        with pytest.raises(TransportIOError):
            t.read(1)
    finally:
        t.close()

    src = tmp_path / "in.bin"
    src.write_bytes(b"x")
    t = file_mod.FileTransport(path=str(src))
    t.open()
    try:
        with pytest.raises(TransportIOError):
            t.write(b"x")
        t.flush()  # no write side: nothing to flush
    finally:
        t.close()


class _FakeStdio:
    def __init__(self, data: bytes = b""):
        self.buffer = io.BytesIO(data)


def test_file_dash_uses_stdio_without_closing_it(monkeypatch):
    fake_in = _FakeStdio(bytes([2, 2]) + b"hi")
    fake_out = _FakeStdio()
    monkeypatch.setattr(sys, "stdin", fake_in)
    monkeypatch.setattr(sys, "stdout", fake_out)

    with MsgStream(file_mod.FileTransport(path="-", out_path="-"), recv_buf_size=16) as stream:
        assert stream.receive_bytes() == b"hi"
        stream.send(b"ok")

    assert not fake_in.buffer.closed
    assert not fake_out.buffer.closed
    assert fake_out.buffer.getvalue() == bytes([2, 2]) + b"ok"
