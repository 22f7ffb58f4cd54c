from __future__ import annotations

from typing import Dict, Type

from .base import Transport
from .errors import TransportError
from .file import FileTransport
from .memory import MemoryTransport
from .tcp import TCPTransport
from .uart import UARTTransport


class TransportDriverRegistry:
    """
    Maps driver keys -> concrete Transport classes.

    Knows nothing about the YAML catalog; TransportFactory joins the two.
    """

    def __init__(self, drivers: Dict[str, Type[Transport]]):
        # keys are case-insensitive
        self._drivers: Dict[str, Type[Transport]] = {k.lower(): v for k, v in drivers.items()}

    @classmethod
    def default(cls) -> "TransportDriverRegistry":
        return cls(
            drivers={
                "file": FileTransport,
                "memory": MemoryTransport,
                "tcp": TCPTransport,
                "uart": UARTTransport,
            }
        )

    def keys(self) -> list[str]:
        return sorted(self._drivers)

    def has(self, driver: str) -> bool:
        return driver.lower() in self._drivers

    def register(self, driver: str, transport_cls: Type[Transport]) -> None:
        self._drivers[driver.lower()] = transport_cls

    def get_class(self, driver: str) -> Type[Transport]:
        key = driver.lower()
        if key not in self._drivers:
            raise TransportError(f"Transport driver '{driver}' not registered")
        return self._drivers[key]

    def create(self, driver: str, **params) -> Transport:
        transport_cls = self.get_class(driver)
        return transport_cls(**params)
