# msgstream/protocol/byteview.py
"""
Byte-view capability used by the sender and receiver.

Any object exposing the buffer protocol (bytes, bytearray, memoryview,
array.array, mmap, numpy arrays, ...) is adapted without copying. Other
containers either implement `msg_bytes()` / `msg_mutable_bytes()` or register
an adapter:

    @readable_view.register(MyBuffer)
    def _(obj): return memoryview(obj.raw)
"""
from __future__ import annotations

from functools import singledispatch
from typing import Any, Protocol, runtime_checkable

from .errors import DataError


@runtime_checkable
class HasBytes(Protocol):
    def msg_bytes(self) -> memoryview: ...


@runtime_checkable
class HasMutableBytes(Protocol):
    def msg_mutable_bytes(self) -> memoryview: ...


def _as_byte_view(obj: Any) -> memoryview:
    try:
        view = memoryview(obj)
    except TypeError:
        raise DataError(f"{type(obj).__name__} does not expose contiguous bytes") from None

    if not view.contiguous:
        view.release()
        raise DataError("byte view is not contiguous")

    if view.format == "B" and view.ndim == 1:
        return view
    try:
        return view.cast("B")
    except TypeError:
        view.release()
        raise DataError(f"cannot view {type(obj).__name__} as raw bytes") from None


@singledispatch
def readable_view(obj: Any) -> memoryview:
    """Borrow a read-only, 1-D unsigned byte view of `obj`."""
    if isinstance(obj, HasBytes):
        return _as_byte_view(obj.msg_bytes())
    return _as_byte_view(obj)


@readable_view.register(str)
def _(obj: str) -> memoryview:
    raise DataError("str has no byte representation; encode it first")


@singledispatch
def writable_view(obj: Any) -> memoryview:
    """Borrow a mutable, 1-D unsigned byte view of `obj`."""
    if isinstance(obj, HasMutableBytes):
        view = _as_byte_view(obj.msg_mutable_bytes())
    else:
        view = _as_byte_view(obj)

    if view.readonly:
        view.release()
        raise DataError(f"{type(obj).__name__} is read-only")
    return view


@writable_view.register(str)
def _(obj: str) -> memoryview:
    raise DataError("str is immutable")
