"""Name scope for declarative reads: aggregate typedefs and bound values."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import KindError, UnboundNameError, UnknownKindError
from .model import SCALARS, Readable
from .typedef import TypeDef


@dataclass
class Environment:
    """Holds the kinds and values textual declarations can refer to."""

    typedefs: dict[str, TypeDef] = field(default_factory=dict)
    bound: dict[str, Any] = field(default_factory=dict)

    # -- TypeDef --------------------------------------------------------

    def register_typedef(self, td: TypeDef) -> None:
        self.typedefs[td.name] = td

    def register(self, cls: type) -> type:
        """Register a ``@readable`` class under its own name.  Usable as a decorator."""
        td = cls.__dict__.get("__readable__") if isinstance(cls, type) else None
        if td is None:
            raise KindError(f"{cls!r} is not readable; decorate it with @readable")
        self.register_typedef(td)
        return cls

    def resolve_typedef(self, name: str) -> TypeDef | None:
        return self.typedefs.get(name)

    def resolve_kind(self, name: str) -> Readable:
        """Built-in scalar names win over registered aggregates."""
        kind = SCALARS.get(name)
        if kind is not None:
            return kind
        td = self.resolve_typedef(name)
        if td is None:
            raise UnknownKindError(name)
        return td

    # -- Values ---------------------------------------------------------

    def bind(self, name: str, value: Any) -> None:
        self.bound[name] = value

    def lookup(self, name: str) -> Any:
        try:
            return self.bound[name]
        except KeyError:
            raise UnboundNameError(name) from None
