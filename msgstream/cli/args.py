# msgstream/cli/args.py
from __future__ import annotations

import argparse
from typing import Any, Mapping, Optional, Tuple

from msgstream.app.config import DEFAULT_RECV_BUF_SIZE
from msgstream.core.context import Context


# ---------------- transport helpers (CLI-local) ----------------

def cast_type_name(type_name: Any):
    """
    argparse `type=` callable for a catalog schema type string.

    NOTE: TransportParamResolver still validates/casts strictly afterwards.
    """
    if type_name == "int":
        return int
    if type_name == "float":
        return float
    if type_name == "bool":

        def _to_bool(v: str) -> bool:
            s = str(v).strip().lower()
            if s in ("1", "true", "yes"):
                return True
            if s in ("0", "false", "no"):
                return False
            raise argparse.ArgumentTypeError(f"Invalid bool literal '{v}' (use true/false)")

        return _to_bool

    return str


def is_effectively_required(spec: Mapping[str, Any]) -> bool:
    if "default" in spec:
        return False
    return bool(spec.get("required", False))


# ---------------- argparse (two-stage) ----------------

def _add_global_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-v", "--verbose", action="store_true", help="Log DEBUG to stderr.")
    parser.add_argument("--log-file", default=None, help="Also append INFO logs to this file.")
    parser.add_argument("--metadata-dir", default=None, help="Directory holding transports.yml.")


def _add_message_flags(sub: argparse._SubParsersAction, parents: list) -> None:
    p_send = sub.add_parser("send", parents=parents, help="Send one framed message.")
    p_send.add_argument(
        "--capacity",
        type=int,
        default=DEFAULT_RECV_BUF_SIZE,
        help="Receive buffer size declared by the peer (fixes the header width).",
    )
    src = p_send.add_mutually_exclusive_group(required=True)
    src.add_argument("--data", help="UTF-8 text payload.")
    src.add_argument("--file", help="Read the payload from this file.")

    p_recv = sub.add_parser("recv", parents=parents, help="Receive framed messages.")
    p_recv.add_argument(
        "--capacity",
        type=int,
        default=DEFAULT_RECV_BUF_SIZE,
        help="Receive buffer size (must match the sender's --capacity).",
    )
    p_recv.add_argument("--count", type=int, default=1, help="Number of messages to receive.")
    p_recv.add_argument("--out", default=None, help="Append payloads to this file instead of stdout.")


def build_base_parser() -> argparse.ArgumentParser:
    """
    Stage 1 parser: command + --transport + app-level args only.
    Transport params are NOT declared here.
    """
    parser = argparse.ArgumentParser(prog="msgstream")
    _add_global_flags(parser)
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("transports", help="List configured transports.")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--transport", required=True, help="Transport label (see: msgstream transports).")
    _add_message_flags(sub, [common])

    return parser


def build_full_parser_for(*, context: Context, transport_type_id: int) -> argparse.ArgumentParser:
    """
    Stage 2 parser: adds --<param> flags from the transport's schema.
    """
    meta = context.meta_for_type_id(transport_type_id)
    params: Mapping[str, Mapping[str, Any]] = meta.params
    key_param = meta.key_param

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--transport", required=True)

    # key param first so it leads in --help
    ordered = sorted(params, key=lambda name: name != key_param)
    for name in ordered:
        spec = params[name]
        common.add_argument(
            f"--{name.replace('_', '-')}",
            dest=name,
            required=is_effectively_required(spec),
            default=None,
            type=cast_type_name(spec.get("type")),
            help=spec.get("help") or f"Transport param for '{meta.label}'.",
        )

    parser = argparse.ArgumentParser(prog="msgstream")
    _add_global_flags(parser)
    sub = parser.add_subparsers(dest="cmd", required=True)
    sub.add_parser("transports")
    _add_message_flags(sub, [common])

    return parser


def parse_args(
    argv: Optional[list[str]] = None,
) -> Tuple[argparse.Namespace, Context, Optional[int], dict]:
    """
    Returns: (args, context, transport_type_id, overrides)

    - transport_type_id is None for 'transports'
    - overrides contains only the transport params given on the command line
    """
    base_parser = build_base_parser()
    base, _unknown = base_parser.parse_known_args(argv)

    context = Context.load(base.metadata_dir)

    if base.cmd == "transports":
        return base, context, None, {}

    type_id = context.resolve_type_id_by_label(base.transport)

    full_parser = build_full_parser_for(context=context, transport_type_id=type_id)
    args = full_parser.parse_args(argv)

    meta = context.meta_for_type_id(type_id)
    overrides = {
        name: getattr(args, name)
        for name in meta.params
        if getattr(args, name, None) is not None
    }

    return args, context, type_id, overrides
