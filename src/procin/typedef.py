"""Aggregate kinds: named, ordered fields each read with its own kind.

Declare one by decorating a dataclass::

    @readable
    @dataclass
    class Edge:
        from_: int = kind_field(USIZE)
        to: int = kind_field(USIZE1)

or build one at runtime with ``define_aggregate``.  A class with no fields
reads nothing and still yields an instance.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Callable

from .errors import KindError
from .model import Readable, as_kind
from .source import Source

KIND_KEY = "procin.kind"


@dataclass(slots=True)
class MemberDef:
    name: str
    kind: Readable


@dataclass(slots=True)
class TypeDef:
    name: str
    members: list[MemberDef] = field(default_factory=list)
    factory: Callable[..., Any] | None = None

    @property
    def is_marker(self) -> bool:
        return not self.members

    def read(self, source: Source) -> Any:
        values = {m.name: m.kind.read(source) for m in self.members}
        if self.factory is None:
            return values
        return self.factory(**values)


def kind_field(kind: Any, **kwargs: Any) -> Any:
    """A ``dataclasses.field`` carrying the kind its value is read with."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[KIND_KEY] = kind
    return field(metadata=metadata, **kwargs)


def readable(cls: type) -> type:
    """Attach an aggregate kind to *cls*, reading its fields in declaration order."""
    if not dataclasses.is_dataclass(cls):
        cls = dataclass(cls)
    members: list[MemberDef] = []
    for f in dataclasses.fields(cls):
        if KIND_KEY not in f.metadata:
            raise KindError(
                f"field {cls.__name__}.{f.name} has no kind; declare it with kind_field()"
            )
        members.append(MemberDef(f.name, as_kind(f.metadata[KIND_KEY])))
    cls.__readable__ = TypeDef(cls.__name__, members, factory=cls)
    return cls


def define_aggregate(name: str, fields: list[tuple[str, Any]]) -> type:
    """Create and return a readable dataclass named *name* from ``(field, kind)`` pairs."""
    try:
        cls = dataclasses.make_dataclass(
            name, [(fname, Any, kind_field(kind)) for fname, kind in fields]
        )
    except (TypeError, ValueError) as exc:
        raise KindError(f"invalid aggregate {name!r}: {exc}") from exc
    return readable(cls)
