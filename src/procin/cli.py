"""``procin`` command line.

``procin tokens`` lists the tokens on stdin, one per line.
``procin read SPEC`` reads SPEC (``"n: usize, a: [i32; n]"``) from stdin
and prints each binding.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from typing import Any

from .config import STRATEGIES, ReaderConfig
from .errors import ProcinError
from .inputs import input_values
from .model import _MarkerType
from .output import flush_output, outputln
from .source import AutoSource


def _fmt_inline(value: Any) -> str:
    """Format a read value for one-line display."""
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float, bytes, _MarkerType)):
        return repr(value)
    if isinstance(value, list):
        return "[" + ", ".join(_fmt_inline(v) for v in value) + "]"
    if isinstance(value, tuple):
        return "(" + ", ".join(_fmt_inline(v) for v in value) + ")"
    if dataclasses.is_dataclass(value):
        fields = ", ".join(
            f"{f.name}={_fmt_inline(getattr(value, f.name))}" for f in dataclasses.fields(value)
        )
        return f"{type(value).__name__}({fields})"
    return repr(value)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="procin", description="Read whitespace-delimited typed values from stdin."
    )
    parser.add_argument("--strategy", choices=STRATEGIES, help="Force the source strategy")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("tokens", help="Print every token on its own line")
    read = sub.add_parser("read", help="Read declared values and print them")
    read.add_argument("spec", help='Declarations, e.g. "n: usize, a: [i32; n]"')
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        env_config = ReaderConfig.from_env()
        config = ReaderConfig(
            strategy=args.strategy or env_config.strategy,
            log_level="DEBUG" if args.verbose else env_config.log_level,
        )
        logging.basicConfig(level=config.log_level, format="%(name)s: %(message)s")

        # Replaced text streams (StringIO) have no binary buffer
        source = AutoSource(getattr(sys.stdin, "buffer", sys.stdin), config)
        if args.command == "tokens":
            while True:
                token = source.next_token()
                if token is None:
                    break
                outputln(token.decode("utf-8", errors="backslashreplace"))
        else:
            values = input_values(args.spec, source=source)
            for name, value in values.as_dict().items():
                outputln(f"{name} = {_fmt_inline(value)}")
    except ProcinError as exc:
        flush_output()
        print(f"procin: {exc}", file=sys.stderr)
        return 1
    flush_output()
    return 0


if __name__ == "__main__":
    sys.exit(main())
