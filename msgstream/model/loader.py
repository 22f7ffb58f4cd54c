# msgstream/model/loader.py
from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import yaml

from .transport import TransportType

CATALOG_FILE = "transports.yml"


class TransportCatalogLoader:
    """
    Loads the transport catalog (transports.yml) into TransportType models.

    After calling load_all(), exposes:
        self.transports : dict[int, TransportType]
    """

    def __init__(self, config_dir: str | Path):
        self.config_dir = Path(config_dir)
        self.transports: Dict[int, TransportType] = {}

    def _load_yaml(self, filename: str) -> dict:
        full_path = self.config_dir / filename
        if not full_path.exists():
            raise FileNotFoundError(f"Missing metadata file: {full_path}")

        with open(full_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def load_all(self) -> None:
        self.transports.clear()

        data = self._load_yaml(CATALOG_FILE)

        transports = data.get("transports")
        if not isinstance(transports, dict):
            raise ValueError(f"{CATALOG_FILE} is missing 'transports' root node")

        labels: set[str] = set()
        for tid_raw, tinfo in transports.items():
            tid = int(tid_raw)
            if not isinstance(tinfo, dict):
                raise ValueError(f"Transport {tid} entry must be a mapping")

            label = tinfo.get("label")
            if not label:
                raise ValueError(f"Transport {tid} is missing 'label'")
            if str(label).lower() in labels:
                raise ValueError(f"Duplicate transport label '{label}'")
            labels.add(str(label).lower())

            driver = tinfo.get("driver")
            if not driver:
                raise ValueError(f"Transport {tid} is missing 'driver'")

            params = tinfo.get("params") or {}
            if not isinstance(params, dict):
                raise ValueError(f"Transport {tid} 'params' must be a mapping")
            for name, spec in params.items():
                if not isinstance(spec, dict):
                    raise ValueError(f"Transport {tid} param '{name}' must be a mapping")

            key_param = tinfo.get("key_param")
            if key_param and key_param not in params:
                raise ValueError(
                    f"Transport {tid} key_param '{key_param}' not defined in params"
                )

            self.transports[tid] = TransportType(
                type_id=tid,
                label=str(label),
                driver=str(driver),
                params=params,  # value checks live in TransportParamResolver
                key_param=key_param,
                duplex=bool(tinfo.get("duplex", True)),
            )

    def get_transport(self, tid: int) -> Optional[TransportType]:
        return self.transports.get(tid)
