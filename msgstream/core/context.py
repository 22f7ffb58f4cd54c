# msgstream/core/context.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

import yaml

from msgstream.model.loader import TransportCatalogLoader
from msgstream.model.transport import TransportType
from msgstream.transport.registry import TransportDriverRegistry
from msgstream.transport.factory import TransportFactory

from msgstream.core.errors import MsgStreamError, TransportConfigError

DEFAULT_METADATA_DIR = Path(__file__).resolve().parents[1] / "metadata"


@dataclass(frozen=True)
class Context:
    transports: Dict[int, TransportType]
    transport_factory: TransportFactory

    @classmethod
    def load(
        cls,
        metadata_dir: str | Path | None = None,
        *,
        drivers: Optional[TransportDriverRegistry] = None,
    ) -> "Context":
        """
        Load the transport catalog and build a transport factory.

        `drivers` is injectable for tests and custom driver registries.
        """
        metadata_dir = Path(metadata_dir) if metadata_dir else DEFAULT_METADATA_DIR

        loader = TransportCatalogLoader(metadata_dir)
        try:
            loader.load_all()
        except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
            raise TransportConfigError(
                "Failed to load transport catalog.",
                hint=str(e),
                details={"metadata_dir": str(metadata_dir)},
            ) from None

        drivers = drivers or TransportDriverRegistry.default()
        for meta in loader.transports.values():
            if not drivers.has(meta.driver):
                raise TransportConfigError(
                    f"Transport '{meta.label}' uses unknown driver '{meta.driver}'.",
                    hint=f"Known drivers: {', '.join(drivers.keys())}",
                    details={"metadata_dir": str(metadata_dir)},
                )

        return cls(
            transports=loader.transports,
            transport_factory=TransportFactory(loader.transports, drivers),
        )

    def meta_for_type_id(self, type_id: int) -> TransportType:
        meta = self.transports.get(int(type_id))
        if meta is None:
            raise MsgStreamError(
                f"Unknown transport type id '{type_id}'.",
                hint="Run: msgstream transports",
            )
        return meta

    def resolve_type_id_by_label(self, label: str) -> int:
        want = label.strip().lower()
        matches = [tid for tid, meta in self.transports.items() if meta.label.lower() == want]
        if not matches:
            known = ", ".join(sorted(m.label for m in self.transports.values()))
            raise TransportConfigError(
                f"Unknown transport '{label}'.",
                hint=f"Run: msgstream transports (known: {known})",
            )
        return int(matches[0])
