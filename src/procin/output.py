"""Buffered output with an explicit flush.

Each thread accumulates its own buffer; nothing reaches ``sys.stdout``
until ``flush_output()`` is called from that thread.
"""

from __future__ import annotations

import sys
import threading
from typing import IO, Any

_local = threading.local()


def _buffer() -> list[str]:
    buf = getattr(_local, "buffer", None)
    if buf is None:
        buf = _local.buffer = []
    return buf


def output(*parts: Any, sep: str = " ", end: str = "") -> None:
    _buffer().append(sep.join(str(p) for p in parts) + end)


def outputln(*parts: Any, sep: str = " ") -> None:
    output(*parts, sep=sep, end="\n")


def pending() -> str:
    """Text buffered by the current thread and not yet flushed."""
    return "".join(_buffer())


def flush_output(file: IO[str] | None = None) -> None:
    buf = _buffer()
    dest = file if file is not None else sys.stdout
    dest.write("".join(buf))
    dest.flush()
    buf.clear()
