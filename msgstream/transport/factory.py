# msgstream/transport/factory.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Mapping

from msgstream.model.transport import TransportType
from msgstream.transport.base import Transport
from msgstream.transport.registry import TransportDriverRegistry
from msgstream.transport.params import TransportParamResolver
from msgstream.transport.errors import TransportError
from msgstream.core.errors import TransportConfigError


@dataclass(frozen=True)
class ConfiguredTransport:
    transport: Transport
    params: Dict[str, Any]
    meta: TransportType


class TransportFactory:
    """
    Builds a transport from its catalog entry + overrides.
    Does NOT open it.
    """

    def __init__(
        self,
        transports: Mapping[int, TransportType],
        drivers: TransportDriverRegistry,
    ):
        self._transports = transports
        self._drivers = drivers
        self._params = TransportParamResolver(transports)

    def transports(self) -> Mapping[int, TransportType]:
        return dict(self._transports)

    def create(self, type_id: int, overrides: Optional[Dict[str, Any]] = None) -> ConfiguredTransport:
        overrides = overrides or {}
        meta = self._transports.get(int(type_id))
        if not meta:
            raise TransportConfigError(
                f"No transport metadata id={type_id}.",
                hint="Run: msgstream transports",
                details={"type_id": int(type_id)},
            )

        params = self._params.resolve(type_id, overrides)
        try:
            transport = self._drivers.create(meta.driver, **params)
        except (TransportError, TypeError, ValueError) as e:
            # unknown driver key or constructor mismatch
            raise TransportConfigError(
                f"Failed to construct transport '{meta.label}' (driver='{meta.driver}').",
                hint=str(e),
                details={
                    "type_id": int(type_id),
                    "driver": meta.driver,
                    "overrides": dict(overrides),
                },
            ) from None

        return ConfiguredTransport(transport=transport, params=params, meta=meta)
