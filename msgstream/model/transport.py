# msgstream/model/transport.py
from __future__ import annotations

from typing import Any, Dict, Optional


class TransportType:
    """
    Catalog entry describing one kind of transport.

    Attributes:
        type_id: Unique numeric ID of this transport type.
        label: Name used on the command line (e.g. "tcp-client").
        driver: Registry key of the Transport class (e.g. "tcp", "uart").
        params: Parameter schema: param_name -> {type, default, required, help}
        key_param: Param that identifies a concrete endpoint (e.g. "port", "path").
        duplex: True if the transport can both send and receive.
    """

    def __init__(
        self,
        type_id: int,
        label: str,
        driver: str,
        params: Optional[Dict[str, Dict[str, Any]]] = None,
        *,
        key_param: Optional[str] = None,
        duplex: bool = True,
    ):
        self.type_id: int = int(type_id)
        self.label: str = str(label)
        self.driver: str = str(driver)
        self.params: Dict[str, Dict[str, Any]] = params or {}
        self.key_param: Optional[str] = str(key_param) if key_param else None
        self.duplex: bool = bool(duplex)

    def as_dict(self) -> dict:
        return {
            "type_id": self.type_id,
            "label": self.label,
            "driver": self.driver,
            "params": self.params,
            "key_param": self.key_param,
            "duplex": self.duplex,
        }

    def __repr__(self) -> str:
        return (
            f"TransportType(type_id={self.type_id}, label='{self.label}', "
            f"driver='{self.driver}')"
        )
