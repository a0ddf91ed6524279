from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .errors import InspectError
from .fetch import DEFAULT_TIMEOUT
from .inspector import DEFAULT_PORT, Inspector
from .log import setup_logging


def _write_output(out_path: str | None, payload: Any) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if out_path:
        Path(out_path).write_text(text + "\n", encoding="utf-8")
    else:
        print(text)


def parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="certi",
        description="TLS certificate chain inspection tool.",
        epilog="examples:\n  certi --host example.com\n  certi --host 192.168.1.100 --port 3000",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--host", help="Server host (required)")
    p.add_argument("--port", type=int, default=DEFAULT_PORT, help="Server port (default: 443)")
    p.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Connect and handshake timeout in seconds (default: 10)",
    )
    p.add_argument("--out", "-o", help="Write JSON output to file (default: stdout)")
    p.add_argument("--verbose", action="store_true", help="Log progress to stderr")
    p.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"certi {__version__}",
        help="Show the version and quit",
    )
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.host is None:
        print("error: --host is required", file=sys.stderr)
        return 1
    if not args.host:
        print("error: --host requires a value", file=sys.stderr)
        return 1

    try:
        inspector = Inspector(timeout=args.timeout)
        result = inspector.inspect(args.host, args.port)
    except (InspectError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    _write_output(args.out, result.to_dict())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
