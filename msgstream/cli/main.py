# msgstream/cli/main.py
from __future__ import annotations

import sys
from typing import Optional

from msgstream.core.errors import MsgStreamError

from msgstream.cli.args import parse_args
from msgstream.cli.commands import (
    configure_logging,
    cmd_transports,
    cmd_send,
    cmd_recv,
)


def main(argv: Optional[list[str]] = None) -> int:
    try:
        args, context, transport_type_id, overrides = parse_args(argv)
        configure_logging(verbose=args.verbose, log_file=args.log_file)

        if args.cmd == "transports":
            return cmd_transports(context=context)

        assert transport_type_id is not None

        if args.cmd == "send":
            return cmd_send(args, context=context, transport_type_id=transport_type_id, transport_overrides=overrides)
        if args.cmd == "recv":
            return cmd_recv(args, context=context, transport_type_id=transport_type_id, transport_overrides=overrides)

        return 2
    except MsgStreamError as e:
        print(f"ERROR: {e.message}", file=sys.stderr)
        if e.hint:
            print(f"Hint: {e.hint}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
