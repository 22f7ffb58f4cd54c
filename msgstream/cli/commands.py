# msgstream/cli/commands.py
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from msgstream.app.config import MsgStreamConfig
from msgstream.app.runner import open_stream
from msgstream.core.context import Context
from msgstream.protocol.header import header_size

from msgstream.cli.args import is_effectively_required

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


# ---------------- Logging ----------------

def configure_logging(*, verbose: bool = False, log_file: Optional[str] = None) -> None:
    """
    Attach stderr / file handlers to the root logger (idempotent).
    Kept in CLI (presentation-layer concern).
    """
    root = logging.getLogger()

    if verbose and not any(getattr(h, "_msgstream_console", False) for h in root.handlers):
        sh = logging.StreamHandler(sys.stderr)
        sh.setLevel(logging.DEBUG)
        sh.setFormatter(logging.Formatter(LOG_FORMAT))
        sh._msgstream_console = True  # type: ignore[attr-defined]
        root.addHandler(sh)
        root.setLevel(logging.DEBUG)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        target = str(path.resolve())

        for h in root.handlers:
            if isinstance(h, logging.FileHandler) and getattr(h, "baseFilename", None) == target:
                return

        fh = logging.FileHandler(path, encoding="utf-8", delay=True)
        fh.setLevel(logging.INFO)
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(fh)

        if root.level > logging.INFO:
            root.setLevel(logging.INFO)


def _status(msg: str) -> None:
    # stdout may be carrying frames or payloads
    print(msg, file=sys.stderr)


# ---------------- Commands ----------------

def cmd_transports(*, context: Context) -> int:
    catalog = context.transports

    print("Available transports:\n")
    print("Usage:")
    print("  msgstream <send|recv> --transport <label> --<key> <value> [--<param> <value> ...]\n")

    for type_id in sorted(catalog.keys()):
        t = catalog[type_id]
        key = t.key_param
        params = t.params

        print(f"{t.label} (id={type_id}, driver={t.driver}{', one-way' if not t.duplex else ''})")
        if key:
            print(f"  key: {key}")

        others = [n for n in params.keys() if n != key]
        if others:
            opts = []
            for name in others:
                spec = params[name]
                if "default" in spec:
                    opts.append(f"{name}={spec['default']!r}")
                elif is_effectively_required(spec):
                    opts.append(f"{name}=<required>")
                else:
                    opts.append(f"{name}=<optional>")
            print("  options: " + ", ".join(opts))
        print()

    return 0


def _config(args, *, transport_type_id: int, transport_overrides: dict) -> MsgStreamConfig:
    return MsgStreamConfig(
        transport_type_id=int(transport_type_id),
        transport_overrides=dict(transport_overrides),
        recv_buf_size=int(args.capacity),
        metadata_dir=args.metadata_dir,
    )


def cmd_send(args, *, context: Context, transport_type_id: int, transport_overrides: dict) -> int:
    cfg = _config(args, transport_type_id=transport_type_id, transport_overrides=transport_overrides)
    payload = args.data.encode("utf-8") if args.data is not None else Path(args.file).read_bytes()

    stream = open_stream(cfg, context=context)
    with stream:
        stream.send(payload)

    _status(f"Sent {len(payload)} bytes (header {header_size(cfg.recv_buf_size)} bytes).")
    return 0


def cmd_recv(args, *, context: Context, transport_type_id: int, transport_overrides: dict) -> int:
    cfg = _config(args, transport_type_id=transport_type_id, transport_overrides=transport_overrides)

    stream = open_stream(cfg, context=context)
    out = open(args.out, "ab") if args.out else sys.stdout.buffer
    try:
        with stream:
            for i in range(max(0, int(args.count))):
                payload = stream.receive_bytes()
                out.write(payload)
                out.flush()
                _status(f"Received message {i + 1}: {len(payload)} bytes.")
    finally:
        if out is not sys.stdout.buffer:
            out.close()
    return 0
