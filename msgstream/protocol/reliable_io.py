# msgstream/protocol/reliable_io.py
"""
Exact-count transfers over a Transport whose read/write may return short.
"""
from __future__ import annotations

import logging
from typing import Optional

from msgstream.transport.base import Transport
from msgstream.transport.errors import TransportError

from .errors import DataError, ReadFailed, WriteFailed

_log = logging.getLogger(__name__)


def _last_error(transport: Transport) -> Optional[BaseException]:
    return getattr(transport, "last_error", None)


def write_fully(transport: Transport, data: memoryview) -> None:
    """Write every byte of `data` or raise WriteFailed."""
    view = memoryview(data)
    offset = 0
    total = len(view)
    while offset < total:
        try:
            n = transport.write(view[offset:])
        except (TransportError, OSError) as e:
            raise WriteFailed(e) from e

        if n is None or n < 0:
            cause = _last_error(transport)
            raise WriteFailed(cause) from cause

        if n < total - offset:
            _log.debug("SHORT_WRITE wrote=%d remaining=%d", n, total - offset - n)
        offset += n


def read_fully(transport: Transport, view: memoryview) -> None:
    """
    Fill `view` completely from the transport.

    A zero-byte read before the view is full is a premature end of stream
    and raises DataError; transport failures raise ReadFailed.
    """
    offset = 0
    total = len(view)
    while offset < total:
        try:
            n = transport.readinto(view[offset:])
        except (TransportError, OSError) as e:
            raise ReadFailed(e) from e

        if n is None or n < 0:
            cause = _last_error(transport)
            raise ReadFailed(cause) from cause
        if n == 0:
            _log.debug("PREMATURE_EOS got=%d wanted=%d", offset, total)
            raise DataError(
                "stream ended mid-frame",
                details={"received": offset, "expected": total},
            )

        if n < total - offset:
            _log.debug("SHORT_READ got=%d remaining=%d", n, total - offset - n)
        offset += n
