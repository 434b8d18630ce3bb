"""Declarative input: read a list of ``name: kind`` entries in order.

Usage::

    values = input_values("n: usize, edges: [(Usize1, Usize1); n]", source=src)
    n, edges = values
    values.edges        # attribute access works too

Each entry triggers exactly one read, left to right, and its value is bound
before the next entry's kind is resolved.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from .context import InputContext, stdin_context
from .environment import Environment
from .errors import KindError
from .grammar import parse_declarations, parse_kind
from .model import Readable, as_kind
from .source import Source

# Method names on Bindings; an entry under one of these would be unreachable as an attribute
RESERVED_NAMES = frozenset({"names", "as_dict", "is_mutable"})


@dataclass(slots=True)
class Binding:
    name: str
    value: Any
    mutable: bool = False


class Bindings:
    """Ordered result of one input request.

    Iterating yields values so the record unpacks like a tuple; names are
    available through ``bindings["n"]`` or ``bindings.n``.  Entry names may not
    collide with the method names in ``RESERVED_NAMES``.
    """

    __slots__ = ("_items",)

    def __init__(self, items: list[Binding] | None = None) -> None:
        self._items = list(items or [])

    def _find(self, name: str) -> Binding:
        for item in self._items:
            if item.name == name:
                return item
        raise KeyError(name)

    def __iter__(self) -> Iterator[Any]:
        return (item.value for item in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, name: object) -> bool:
        return any(item.name == name for item in self._items)

    def __getitem__(self, key: str | int) -> Any:
        if isinstance(key, int):
            return self._items[key].value
        return self._find(key).value

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._find(name).value
        except KeyError:
            raise AttributeError(name) from None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bindings):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        inner = ", ".join(f"{item.name}={item.value!r}" for item in self._items)
        return f"Bindings({inner})"

    def names(self) -> list[str]:
        return [item.name for item in self._items]

    def as_dict(self) -> dict[str, Any]:
        return {item.name: item.value for item in self._items}

    def is_mutable(self, name: str) -> bool:
        return self._find(name).mutable


@dataclass(slots=True)
class _Entry:
    name: str
    kind: Any
    mutable: bool


class Input:
    """Builder for one top-level input request.

    ``kind`` may be a kind object or Python descriptor (see ``as_kind``), a
    textual kind such as ``"[i32; n]"``, or a callable taking the
    ``Bindings`` read so far and returning a descriptor.

    Without an explicit *source* the request reads through *context*
    (default: the shared stdin context) and holds its lock until ``run``
    returns.
    """

    def __init__(
        self,
        source: Source | None = None,
        *,
        context: InputContext | None = None,
        environment: Environment | None = None,
    ) -> None:
        self._source = source
        self._context = context
        self.environment = environment if environment is not None else Environment()
        self._entries: list[_Entry] = []

    def entry(self, name: str, kind: Any, *, mutable: bool = False) -> Input:
        if name in RESERVED_NAMES:
            raise KindError(f"{name!r} is reserved for a Bindings method; pick another name")
        self._entries.append(_Entry(name, kind, mutable))
        return self

    def declare(self, spec: str) -> Input:
        """Append every declaration in *spec* (``"mut n: usize, a: [i32; n]"``)."""
        for decl in parse_declarations(spec):
            self.entry(decl.name, decl.kind, mutable=decl.mutable)
        return self

    def run(self) -> Bindings:
        if self._source is not None:
            return self._read_all(self._source)
        context = self._context or stdin_context()
        with context.locked() as source:
            return self._read_all(source)

    def _resolve(self, kind: Any, done: Bindings) -> Readable:
        if isinstance(kind, str):
            return parse_kind(kind).resolve(self.environment)
        if callable(getattr(kind, "resolve", None)):
            return kind.resolve(self.environment)
        if callable(kind) and not isinstance(kind, type) and not hasattr(kind, "read"):
            kind = kind(done)
        return as_kind(kind)

    def _read_all(self, source: Source) -> Bindings:
        done = Bindings()
        for entry in self._entries:
            kind = self._resolve(entry.kind, done)
            value = kind.read(source)
            self.environment.bind(entry.name, value)
            done._items.append(Binding(entry.name, value, entry.mutable))
        return done


def input_values(
    spec: str,
    *,
    source: Source | None = None,
    context: InputContext | None = None,
    environment: Environment | None = None,
) -> Bindings:
    """Read every declaration in *spec* and return the bound values in order."""
    return Input(source, context=context, environment=environment).declare(spec).run()
