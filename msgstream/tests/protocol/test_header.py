from __future__ import annotations

import pytest

from msgstream.protocol.errors import DataError, MessageTooBig
from msgstream.protocol.header import (
    MAX_CAPACITY,
    Header,
    decode_header,
    encode_header,
    header_size,
)


@pytest.mark.parametrize(
    "capacity, expected",
    [
        (0, 1),
        (0x01, 2),
        (0xFF, 2),
        (0x0100, 3),
        (0xFFFF, 3),
        (0x010000, 4),
        (0xFFFFFF, 4),
        (0x01000000, 5),
        (0xFFFFFFFF, 5),
        (0x0100000000, 6),
        (0xFFFFFFFFFF, 6),
        (0x010000000000, 7),
        (0xFFFFFFFFFFFF, 7),
        (0x01000000000000, 8),
        (0xFFFFFFFFFFFFFF, 8),
        (0x0100000000000000, 9),
        (0xFFFFFFFFFFFFFFFF, 9),
    ],
)
def test_header_size_boundaries(capacity, expected):
    assert header_size(capacity) == expected


def test_header_size_is_monotonic_around_powers_of_256():
    prev = header_size(0)
    for k in range(1, 8):
        p = 256 ** k
        for c in (p - 2, p - 1, p, p + 1):
            size = header_size(c)
            assert size >= prev
            prev = size
        assert header_size(p) == header_size(p - 1) + 1

    # 256**8 itself is past the largest capacity
    assert header_size(MAX_CAPACITY - 1) == header_size(MAX_CAPACITY) == 9


@pytest.mark.parametrize("bad", [-1, MAX_CAPACITY + 1, 1.5, "32", True])
def test_header_size_rejects_out_of_range_or_non_int(bad):
    with pytest.raises(ValueError):
        header_size(bad)


def test_encode_header_small_capacity():
    # capacity 32 -> 2-byte header, payload of 3
    assert encode_header(header_size(32), 3) == bytes([2, 3])


def test_encode_header_is_little_endian_and_zero_padded():
    assert encode_header(4, 0x0102) == bytes([4, 0x02, 0x01, 0x00])


def test_encode_header_size_one_only_fits_zero():
    assert encode_header(1, 0) == b"\x01"
    with pytest.raises(MessageTooBig):
        encode_header(1, 1)


def test_encode_header_raises_when_length_does_not_fit():
    with pytest.raises(MessageTooBig) as ei:
        encode_header(2, 256)

    assert ei.value.msg_size == 256
    assert ei.value.buf_size == 255
    assert ei.value.code == "message_too_big"


def test_encode_header_accepts_largest_representable_length():
    raw = encode_header(9, MAX_CAPACITY)
    assert raw == b"\x09" + b"\xff" * 8


@pytest.mark.parametrize("size", [0, 10])
def test_encode_header_rejects_bad_size(size):
    with pytest.raises(ValueError):
        encode_header(size, 0)


def test_decode_header_returns_size_and_length():
    hdr = decode_header(bytes([2, 4]))
    assert hdr == Header(declared_size=2, payload_len=4)

    size, length = decode_header(bytes([3, 0x34, 0x12]))
    assert (size, length) == (3, 0x1234)


def test_decode_header_reports_declared_size_verbatim():
    # decode is pure; validation against capacity is the receiver's job
    assert decode_header(bytes([7, 1])).declared_size == 7


def test_decode_header_inverts_encode():
    for size, length in [(1, 0), (2, 200), (5, 0xDEADBEEF), (9, 2**63)]:
        assert decode_header(encode_header(size, length)) == (size, length)


def test_decode_header_empty_raises_data_error():
    with pytest.raises(DataError):
        decode_header(b"")
