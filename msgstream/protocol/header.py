# msgstream/protocol/header.py
from __future__ import annotations

from typing import NamedTuple

from .errors import DataError, MessageTooBig

MAX_CAPACITY = 0xFFFFFFFFFFFFFFFF
MAX_HEADER_SIZE = 9


class Header(NamedTuple):
    declared_size: int
    payload_len: int


def _digits_base256(n: int) -> int:
    count = 0
    while n > 0:
        count += 1
        n >>= 8
    return count


def header_size(capacity: int) -> int:
    """
    Header width (size byte included) for a receiver declaring `capacity`.

    Depends only on the capacity, never on the actual payload length.
    """
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise ValueError(f"capacity must be an int, got {type(capacity).__name__}")
    if capacity < 0 or capacity > MAX_CAPACITY:
        raise ValueError(f"capacity out of range: {capacity}")
    return _digits_base256(capacity) + 1


def max_payload_len(size: int) -> int:
    """Largest length representable in a header of `size` bytes."""
    return (1 << (8 * (size - 1))) - 1


def encode_header(size: int, payload_len: int) -> bytes:
    if not 1 <= size <= MAX_HEADER_SIZE:
        raise ValueError(f"header size out of range: {size}")
    if payload_len < 0:
        raise ValueError(f"negative payload length: {payload_len}")

    limit = max_payload_len(size)
    if payload_len > limit:
        raise MessageTooBig(payload_len, limit)

    return bytes([size]) + payload_len.to_bytes(size - 1, "little")


def decode_header(raw: bytes) -> Header:
    if len(raw) < 1:
        raise DataError("empty header")
    return Header(declared_size=raw[0], payload_len=int.from_bytes(bytes(raw[1:]), "little"))
