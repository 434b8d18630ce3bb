"""Kind descriptors and the readable conversion protocol.

A *kind* describes what to read next; reading it against a ``Source``
consumes exactly the tokens it needs and returns the output value.  The
output type need not match the kind: ``USIZE1`` reads a ``usize`` token and
yields an ``int`` one smaller.
"""

from __future__ import annotations

import math
import re
import struct
from dataclasses import dataclass
from typing import Any, Protocol

from .errors import KindError, MalformedError, UnderflowError
from .source import Source, next_token_or_raise


# ---------------------------------------------------------------------------
# Marker — sentinel produced by zero-token kinds
# ---------------------------------------------------------------------------

class _MarkerType:
    """Sentinel returned by ``MARKER``; reading it consumes nothing."""

    _instance: _MarkerType | None = None

    def __new__(cls) -> _MarkerType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Marker"


Marker = _MarkerType()


# ---------------------------------------------------------------------------
# Readable protocol
# ---------------------------------------------------------------------------

class Readable(Protocol):
    """Capability that turns tokens from a source into one output value."""

    name: str

    def read(self, source: Source) -> Any:
        ...


def _decode(token: bytes, expected: str, index: int) -> str:
    try:
        return token.decode("utf-8")
    except UnicodeDecodeError:
        raise MalformedError(expected, token, index, reason="invalid UTF-8") from None


# ---------------------------------------------------------------------------
# Scalar kinds
# ---------------------------------------------------------------------------

_UNSIGNED_RE = re.compile(r"\+?([0-9]+)")
_SIGNED_RE = re.compile(r"[+-]?([0-9]+)")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class IntKind:
    name: str
    min: int
    max: int

    @property
    def signed(self) -> bool:
        return self.min < 0

    def parse(self, token: bytes, index: int, expected: str | None = None) -> int:
        expected = expected or self.name
        text = _decode(token, expected, index)
        m = (_SIGNED_RE if self.signed else _UNSIGNED_RE).fullmatch(text)
        if m is None:
            raise MalformedError(expected, token, index, reason="invalid integer literal")
        # Reject absurdly long literals before int() does the work
        if len(m.group(1).lstrip("0")) > len(str(max(self.max, -self.min))):
            raise MalformedError(expected, token, index, reason="integer out of range")
        value = int(text)
        if not self.min <= value <= self.max:
            raise MalformedError(expected, token, index, reason="integer out of range")
        return value

    def read(self, source: Source) -> int:
        token = next_token_or_raise(source, self.name)
        return self.parse(token, source.tokens_read)


@dataclass(frozen=True, slots=True)
class FloatKind:
    name: str
    single: bool = False

    def read(self, source: Source) -> float:
        token = next_token_or_raise(source, self.name)
        index = source.tokens_read
        text = _decode(token, self.name, index)
        if _FLOAT_RE.fullmatch(text) is None:
            raise MalformedError(self.name, token, index, reason="invalid float literal")
        value = float(text)
        if self.single:
            try:
                value = struct.unpack("f", struct.pack("f", value))[0]
            except OverflowError:
                value = math.copysign(math.inf, value)
        return value


@dataclass(frozen=True, slots=True)
class BoolKind:
    name: str = "bool"

    def read(self, source: Source) -> bool:
        token = next_token_or_raise(source, self.name)
        if token == b"true":
            return True
        if token == b"false":
            return False
        raise MalformedError(self.name, token, source.tokens_read, reason="invalid bool literal")


@dataclass(frozen=True, slots=True)
class CharKind:
    name: str = "char"

    def read(self, source: Source) -> str:
        token = next_token_or_raise(source, self.name)
        text = _decode(token, self.name, source.tokens_read)
        if len(text) != 1:
            raise MalformedError(
                self.name, token, source.tokens_read, reason="expected exactly one character"
            )
        return text


@dataclass(frozen=True, slots=True)
class StrKind:
    name: str = "String"

    def read(self, source: Source) -> str:
        token = next_token_or_raise(source, self.name)
        return _decode(token, self.name, source.tokens_read)


@dataclass(frozen=True, slots=True)
class CharsKind:
    name: str = "Chars"

    def read(self, source: Source) -> list[str]:
        token = next_token_or_raise(source, self.name)
        return list(_decode(token, self.name, source.tokens_read))


@dataclass(frozen=True, slots=True)
class BytesKind:
    name: str = "Bytes"

    def read(self, source: Source) -> bytes:
        return next_token_or_raise(source, self.name)


@dataclass(frozen=True, slots=True)
class Index1Kind:
    """Reads an integer of ``base`` kind and converts it from one-indexed to zero-indexed."""

    name: str
    base: IntKind

    def read(self, source: Source) -> int:
        token = next_token_or_raise(source, self.name)
        value = self.base.parse(token, source.tokens_read, expected=self.name)
        if value == self.base.min:
            raise UnderflowError(self.name, token, source.tokens_read)
        return value - 1


@dataclass(frozen=True, slots=True)
class MarkerKind:
    name: str = "Marker"

    def read(self, source: Source) -> _MarkerType:
        return Marker


def _unsigned(name: str, bits: int) -> IntKind:
    return IntKind(name, 0, (1 << bits) - 1)


def _signed(name: str, bits: int) -> IntKind:
    return IntKind(name, -(1 << (bits - 1)), (1 << (bits - 1)) - 1)


U8 = _unsigned("u8", 8)
U16 = _unsigned("u16", 16)
U32 = _unsigned("u32", 32)
U64 = _unsigned("u64", 64)
U128 = _unsigned("u128", 128)
USIZE = _unsigned("usize", 64)
I8 = _signed("i8", 8)
I16 = _signed("i16", 16)
I32 = _signed("i32", 32)
I64 = _signed("i64", 64)
I128 = _signed("i128", 128)
ISIZE = _signed("isize", 64)
F32 = FloatKind("f32", single=True)
F64 = FloatKind("f64")
BOOL = BoolKind()
CHAR = CharKind()
STRING = StrKind()
CHARS = CharsKind()
BYTES = BytesKind()
USIZE1 = Index1Kind("Usize1", USIZE)
ISIZE1 = Index1Kind("Isize1", ISIZE)
MARKER = MarkerKind()

SCALARS: dict[str, Readable] = {
    k.name: k
    for k in (
        U8, U16, U32, U64, U128, USIZE,
        I8, I16, I32, I64, I128, ISIZE,
        F32, F64, BOOL, CHAR, STRING, CHARS, BYTES,
        USIZE1, ISIZE1, MARKER,
    )
}


# ---------------------------------------------------------------------------
# Composite kinds
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TupleKind:
    items: tuple[Readable, ...]

    @property
    def name(self) -> str:
        if len(self.items) == 1:
            return f"({self.items[0].name},)"
        return "(" + ", ".join(k.name for k in self.items) + ")"

    def read(self, source: Source) -> tuple:
        return tuple(k.read(source) for k in self.items)


@dataclass(frozen=True, slots=True)
class SeqKind:
    """``length`` reads of ``item``; nested sequences come out row-major."""

    item: Readable
    length: int

    def __post_init__(self) -> None:
        if isinstance(self.length, bool) or not isinstance(self.length, int):
            raise KindError(f"sequence length must be an int, got {self.length!r}")
        if self.length < 0:
            raise KindError(f"sequence length must be non-negative, got {self.length}")

    @property
    def name(self) -> str:
        return f"[{self.item.name}; {self.length}]"

    def read(self, source: Source) -> list:
        return [self.item.read(source) for _ in range(self.length)]


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def as_kind(desc: Any) -> Readable:
    """Normalise a descriptor into a ``Readable``.

    - a class decorated with ``@readable`` → its aggregate kind
    - ``tuple`` of descriptors → ``TupleKind``
    - ``[descriptor, length]`` → ``SeqKind``
    - anything already exposing ``read`` → itself
    """
    if isinstance(desc, type):
        # Looked up on the class itself; an undecorated subclass must not read as its parent
        aggregate = desc.__dict__.get("__readable__")
        if aggregate is None:
            raise KindError(f"{desc.__name__} is not readable; decorate it with @readable")
        return aggregate
    if isinstance(desc, tuple):
        return TupleKind(tuple(as_kind(d) for d in desc))
    if isinstance(desc, list):
        if len(desc) != 2:
            raise KindError(f"sequence descriptor must be [kind, length], got {desc!r}")
        return SeqKind(as_kind(desc[0]), desc[1])
    if callable(getattr(desc, "read", None)):
        return desc
    raise KindError(f"not a kind descriptor: {desc!r}")


def read_value(desc: Any, source: Source) -> Any:
    """Read one value of kind *desc* from *source*."""
    return as_kind(desc).read(source)
