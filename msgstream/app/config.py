# msgstream/app/config.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

DEFAULT_RECV_BUF_SIZE = 2048


@dataclass(frozen=True)
class MsgStreamConfig:
    transport_type_id: int
    transport_overrides: dict = field(default_factory=dict)
    recv_buf_size: int = DEFAULT_RECV_BUF_SIZE
    metadata_dir: Optional[str] = None
