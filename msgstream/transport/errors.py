# msgstream/transport/errors.py
from __future__ import annotations


class TransportError(Exception):
    """Base class for transport-layer failures."""


class TransportOpenError(TransportError):
    """The endpoint could not be opened (port, socket, file)."""


class TransportIOError(TransportError):
    """A read, write or flush failed, or was issued while closed."""


class TransportTimeout(TransportIOError):
    """A blocking operation hit the driver's configured timeout."""
