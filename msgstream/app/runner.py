# msgstream/app/runner.py
from __future__ import annotations

import logging
from typing import Optional

from msgstream.app.config import MsgStreamConfig
from msgstream.core.context import Context
from msgstream.core.errors import TransportConfigError
from msgstream.protocol.header import MAX_CAPACITY
from msgstream.protocol.stream import MsgStream


def open_stream(
    cfg: MsgStreamConfig,
    *,
    context: Optional[Context] = None,
    logger: Optional[logging.Logger] = None,
) -> MsgStream:
    """
    Build (but do not open) a MsgStream for the configured transport.

    Pass `context` to avoid reloading the catalog.
    """
    log = logger or logging.getLogger(__name__)

    if not 0 < cfg.recv_buf_size <= MAX_CAPACITY:
        raise TransportConfigError(
            f"Invalid receive buffer size {cfg.recv_buf_size}.",
            hint="Use a positive size that both peers agree on.",
            details={"recv_buf_size": cfg.recv_buf_size},
        )

    context = context or Context.load(cfg.metadata_dir)
    configured = context.transport_factory.create(cfg.transport_type_id, cfg.transport_overrides)

    log.info(
        "STREAM_CONFIGURED transport=%s driver=%s params=%s recv_buf_size=%d",
        configured.meta.label,
        configured.meta.driver,
        configured.params,
        cfg.recv_buf_size,
    )
    return MsgStream(configured.transport, recv_buf_size=cfg.recv_buf_size, logger=logger)
