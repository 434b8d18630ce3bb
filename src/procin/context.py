"""Shared input contexts.

An ``InputContext`` owns one source and a lock.  Callers hold the lock for
exactly one top-level request so that concurrent requests never interleave
their token reads.  Sources passed explicitly to a request bypass all of
this; their owner must not share them across threads.
"""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO

from .config import ReaderConfig
from .source import AutoSource, Source

logger = logging.getLogger("procin.context")


class InputContext:
    """A source shared between call sites, guarded by a non-reentrant lock."""

    __slots__ = ("_lock", "_source")

    def __init__(self, source: Source) -> None:
        self._source = source
        self._lock = threading.Lock()

    @classmethod
    def from_stream(cls, stream: IO, config: ReaderConfig | None = None) -> InputContext:
        return cls(AutoSource(stream, config))

    @contextmanager
    def locked(self) -> Iterator[Source]:
        """Hold exclusive access to the source for the duration of the block."""
        with self._lock:
            yield self._source


_stdin_lock = threading.Lock()
_stdin_context: InputContext | None = None


def stdin_context(config: ReaderConfig | None = None) -> InputContext:
    """The context over ``sys.stdin``, built on first use.

    *config* only takes effect on the call that builds it; later calls
    return the same context.
    """
    global _stdin_context
    with _stdin_lock:
        if _stdin_context is None:
            cfg = config or ReaderConfig.from_env()
            logger.debug("building stdin context (strategy=%s)", cfg.strategy)
            stream = getattr(sys.stdin, "buffer", sys.stdin)
            _stdin_context = InputContext.from_stream(stream, cfg)
        return _stdin_context
