# msgstream/transport/params.py
from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional

from msgstream.model.transport import TransportType
from msgstream.core.errors import TransportConfigError


class TransportParamResolver:
    """
    Resolve concrete transport kwargs from a TransportType param schema + overrides.
    """

    def __init__(self, transports: Mapping[int, TransportType]):
        self._transports = transports

    def resolve(self, type_id: int, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        overrides = overrides or {}
        meta = self._transports.get(int(type_id))
        if not meta:
            raise TransportConfigError(
                f"No transport metadata id={type_id}.",
                hint="Run: msgstream transports",
                details={"type_id": int(type_id)},
            ) from None

        return self._resolve_from_meta(meta, overrides)

    def _resolve_from_meta(self, meta: TransportType, overrides: Dict[str, Any]) -> Dict[str, Any]:
        resolved: Dict[str, Any] = {}

        for key in overrides:
            if key not in meta.params:
                raise TransportConfigError(
                    f"Unknown transport param '{key}' for transport '{meta.label}'.",
                    hint=f"Valid params: {sorted(meta.params.keys())}",
                    details={"label": meta.label, "driver": meta.driver, "param": key},
                ) from None

        for name, spec in meta.params.items():
            if name in overrides:
                value = overrides[name]
            elif "default" in spec:
                value = spec["default"]
            elif spec.get("required", False):
                raise TransportConfigError(
                    f"Missing required transport param '{name}' for transport '{meta.label}'.",
                    hint=f"Pass --{name} <value>.",
                    details={"label": meta.label, "driver": meta.driver, "param": name},
                ) from None
            else:
                continue

            try:
                resolved[name] = self._cast_param(value, spec.get("type"))
            except (TypeError, ValueError) as e:
                raise TransportConfigError(
                    f"Invalid value for transport '{meta.label}' param '{name}'.",
                    hint=str(e),
                    details={
                        "label": meta.label,
                        "driver": meta.driver,
                        "param": name,
                        "value": value,
                        "expected_type": spec.get("type"),
                    },
                ) from None

        return resolved

    @staticmethod
    def _cast_param(value: Any, type_name: Any) -> Any:
        if value is None:
            return None
        caster = _CASTERS.get(type_name)
        if caster is None:
            raise TypeError(f"Unknown schema type '{type_name}'")
        return caster(value)


def _as_str(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"Expected str, got {type(value).__name__}")
    return value


def _as_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Expected int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"Expected a non-negative int, got {value}")
    return value


def _as_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Expected float, got {type(value).__name__}")
    return float(value)


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    # YAML/CLI may hand us 0/1
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise TypeError(f"Expected bool (or 0/1), got {type(value).__name__}")


_CASTERS: Dict[str, Callable[[Any], Any]] = {
    "str": _as_str,
    "int": _as_int,
    "float": _as_float,
    "bool": _as_bool,
}
