"""Token sources: whitespace-delimited cursors over a byte provider.

Three interchangeable backends share one contract:

- ``OnceSource`` reads the provider to completion up front and serves
  tokens from memory.
- ``LineSource`` reads one line at a time, only when the current line has
  no tokens left.
- ``AutoSource`` probes the provider once and delegates to one of the two.

Whitespace is exactly space, tab, CR and LF.  A token is never empty and
once served is never served again, so independent reads against the same
source resume where the previous one stopped.
"""

from __future__ import annotations

import io
import logging
import re
from typing import IO, AnyStr, Protocol

from .config import ReaderConfig
from .errors import ExhaustedError

logger = logging.getLogger("procin.source")

_TOKEN_RE = re.compile(rb"[^ \t\r\n]+")


class Source(Protocol):
    """Cursor contract every backend implements."""

    tokens_read: int

    def next_token(self) -> bytes | None:
        """Return the next token, or ``None`` once the provider is exhausted."""
        ...

    def is_empty(self) -> bool:
        """True when no token remains.  Never consumes a token."""
        ...


def next_token_or_raise(source: Source, expected: str) -> bytes:
    """Pull one token for a reader of kind *expected*; raise if none is left."""
    token = source.next_token()
    if token is None:
        raise ExhaustedError(expected, source.tokens_read + 1)
    return token


def _to_bytes(data: AnyStr) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


# ---------------------------------------------------------------------------
# OnceSource
# ---------------------------------------------------------------------------

class OnceSource:
    """Eager source: the whole provider is buffered at construction."""

    __slots__ = ("_buf", "_pos", "tokens_read")

    def __init__(self, stream: IO) -> None:
        self._buf = _to_bytes(stream.read())
        self._pos = 0
        self.tokens_read = 0
        logger.debug("OnceSource buffered %d bytes", len(self._buf))

    @classmethod
    def from_bytes(cls, data: bytes) -> OnceSource:
        return cls(io.BytesIO(data))

    @classmethod
    def from_str(cls, text: str) -> OnceSource:
        return cls.from_bytes(text.encode("utf-8"))

    def next_token(self) -> bytes | None:
        m = _TOKEN_RE.search(self._buf, self._pos)
        if m is None:
            self._pos = len(self._buf)
            return None
        self._pos = m.end()
        self.tokens_read += 1
        return m.group()

    def is_empty(self) -> bool:
        return _TOKEN_RE.search(self._buf, self._pos) is None


# ---------------------------------------------------------------------------
# LineSource
# ---------------------------------------------------------------------------

class LineSource:
    """Incremental source: fetches a new line only when the current one is spent."""

    __slots__ = ("_stream", "_line", "_pos", "_eof", "tokens_read")

    def __init__(self, stream: IO) -> None:
        self._stream = stream
        self._line = b""
        self._pos = 0
        self._eof = False
        self.tokens_read = 0

    @classmethod
    def from_bytes(cls, data: bytes) -> LineSource:
        return cls(io.BytesIO(data))

    @classmethod
    def from_str(cls, text: str) -> LineSource:
        return cls.from_bytes(text.encode("utf-8"))

    def _refill(self) -> bool:
        """Replace the current line with the next one.  False at end of stream."""
        if self._eof:
            return False
        line = self._stream.readline()
        if not line:
            self._eof = True
            logger.debug("LineSource reached end of stream after %d tokens", self.tokens_read)
            return False
        self._line = _to_bytes(line)
        self._pos = 0
        return True

    def _find(self) -> re.Match[bytes] | None:
        while True:
            m = _TOKEN_RE.search(self._line, self._pos)
            if m is not None:
                return m
            if not self._refill():
                return None

    def next_token(self) -> bytes | None:
        m = self._find()
        if m is None:
            return None
        self._pos = m.end()
        self.tokens_read += 1
        return m.group()

    def is_empty(self) -> bool:
        return self._find() is None


# ---------------------------------------------------------------------------
# AutoSource
# ---------------------------------------------------------------------------

def is_interactive(stream: IO) -> bool:
    """Whether *stream* looks like a terminal rather than redirected data."""
    isatty = getattr(stream, "isatty", None)
    return bool(isatty()) if isatty is not None else False


class AutoSource:
    """Chooses ``LineSource`` for interactive providers and ``OnceSource`` otherwise.

    Both backends yield identical tokens for the same bytes; only latency
    differs.  ``config.strategy`` can force either one.
    """

    __slots__ = ("_inner", "strategy")

    def __init__(self, stream: IO, config: ReaderConfig | None = None) -> None:
        strategy = (config or ReaderConfig()).strategy
        if strategy == "auto":
            strategy = "line" if is_interactive(stream) else "once"
        logger.debug("AutoSource selected %r strategy", strategy)
        self.strategy = strategy
        self._inner: OnceSource | LineSource = (
            OnceSource(stream) if strategy == "once" else LineSource(stream)
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> AutoSource:
        return cls(io.BytesIO(data))

    @classmethod
    def from_str(cls, text: str) -> AutoSource:
        return cls.from_bytes(text.encode("utf-8"))

    @property
    def tokens_read(self) -> int:
        return self._inner.tokens_read

    def next_token(self) -> bytes | None:
        return self._inner.next_token()

    def is_empty(self) -> bool:
        return self._inner.is_empty()
