"""Textual kind grammar.

::

    decls   := decl (',' decl)* [',']
    decl    := ['mut'] NAME ':' kind
    kind    := NAME | '(' [kind (',' kind)* [',']] ')' | '[' kind ';' expr ']'
    expr    := term (('+' | '-') term)*
    term    := atom (('*' | '/') atom)*
    atom    := INT | NAME | '(' expr ')'

Parsing yields unresolved expressions; names inside them are looked up in an
``Environment`` only at ``resolve`` time, so ``[i32; n]`` can refer to an
``n`` read by an earlier declaration of the same request.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .environment import Environment
from .errors import KindError, KindSyntaxError
from .model import Readable, SeqKind, TupleKind

_LEX_RE = re.compile(
    r"\s*(?:(?P<int>[0-9]+)|(?P<name>[A-Za-z_][A-Za-z_0-9]*)|(?P<punct>[()\[\];,:+\-*/]))"
)
_TRAILING_WS_RE = re.compile(r"\s*")


@dataclass(frozen=True, slots=True)
class Lexeme:
    type: str  # "int" | "name" | "punct" | "end"
    value: str
    column: int


def tokenize(text: str) -> list[Lexeme]:
    out: list[Lexeme] = []
    pos = 0
    while True:
        m = _LEX_RE.match(text, pos)
        if m is None:
            tail = _TRAILING_WS_RE.match(text, pos)
            if tail.end() == len(text):
                out.append(Lexeme("end", "", len(text) + 1))
                return out
            raise KindSyntaxError("unexpected character", text, tail.end() + 1)
        kind = m.lastgroup
        out.append(Lexeme(kind, m.group(kind), m.start(kind) + 1))
        pos = m.end()


# ---------------------------------------------------------------------------
# Length expressions
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Num:
    value: int

    def evaluate(self, env: Environment) -> int:
        return self.value


@dataclass(frozen=True, slots=True)
class Ref:
    name: str

    def evaluate(self, env: Environment) -> int:
        value = env.lookup(self.name)
        if isinstance(value, bool) or not isinstance(value, int):
            raise KindError(f"length {self.name!r} is bound to non-integer {value!r}")
        return value


@dataclass(frozen=True, slots=True)
class BinOp:
    op: str
    left: Num | Ref | BinOp
    right: Num | Ref | BinOp

    def evaluate(self, env: Environment) -> int:
        a = self.left.evaluate(env)
        b = self.right.evaluate(env)
        if self.op == "+":
            return a + b
        if self.op == "-":
            return a - b
        if self.op == "*":
            return a * b
        if b == 0:
            raise KindError("division by zero in length expression")
        return a // b


Expr = Num | Ref | BinOp


# ---------------------------------------------------------------------------
# Kind expressions
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class NamedKind:
    name: str

    def resolve(self, env: Environment) -> Readable:
        return env.resolve_kind(self.name)


@dataclass(frozen=True, slots=True)
class TupleOf:
    items: tuple[KindExpr, ...]

    def resolve(self, env: Environment) -> Readable:
        return TupleKind(tuple(item.resolve(env) for item in self.items))


@dataclass(frozen=True, slots=True)
class SequenceOf:
    item: KindExpr
    length: Expr

    def resolve(self, env: Environment) -> Readable:
        return SeqKind(self.item.resolve(env), self.length.evaluate(env))


KindExpr = NamedKind | TupleOf | SequenceOf


@dataclass(frozen=True, slots=True)
class Declaration:
    name: str
    kind: KindExpr
    mutable: bool = False


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.lexemes = tokenize(text)
        self.pos = 0

    @property
    def current(self) -> Lexeme:
        return self.lexemes[self.pos]

    def _error(self, message: str) -> KindSyntaxError:
        return KindSyntaxError(message, self.text, self.current.column)

    def _check(self, value: str) -> bool:
        return self.current.type == "punct" and self.current.value == value

    def _accept(self, value: str) -> bool:
        if self._check(value):
            self.pos += 1
            return True
        return False

    def _expect(self, value: str) -> None:
        if not self._accept(value):
            found = self.current.value or "end of input"
            raise self._error(f"expected {value!r} but found {found!r}")

    def _name(self) -> str:
        if self.current.type != "name":
            raise self._error("expected a name")
        value = self.current.value
        self.pos += 1
        return value

    def expect_end(self) -> None:
        if self.current.type != "end":
            raise self._error(f"unexpected {self.current.value!r}")

    # -- kinds ----------------------------------------------------------

    def kind(self) -> KindExpr:
        if self._accept("("):
            items: list[KindExpr] = []
            while not self._check(")"):
                items.append(self.kind())
                if not self._accept(","):
                    break
            self._expect(")")
            return TupleOf(tuple(items))
        if self._accept("["):
            item = self.kind()
            self._expect(";")
            length = self.expr()
            self._expect("]")
            return SequenceOf(item, length)
        return NamedKind(self._name())

    # -- expressions ----------------------------------------------------

    def expr(self) -> Expr:
        node = self.term()
        while self.current.type == "punct" and self.current.value in ("+", "-"):
            op = self.current.value
            self.pos += 1
            node = BinOp(op, node, self.term())
        return node

    def term(self) -> Expr:
        node = self.atom()
        while self.current.type == "punct" and self.current.value in ("*", "/"):
            op = self.current.value
            self.pos += 1
            node = BinOp(op, node, self.atom())
        return node

    def atom(self) -> Expr:
        if self.current.type == "int":
            value = int(self.current.value)
            self.pos += 1
            return Num(value)
        if self._accept("("):
            node = self.expr()
            self._expect(")")
            return node
        return Ref(self._name())

    # -- declarations ---------------------------------------------------

    def declaration(self) -> Declaration:
        mutable = False
        if (
            self.current.type == "name"
            and self.current.value == "mut"
            and self.lexemes[self.pos + 1].type == "name"
        ):
            mutable = True
            self.pos += 1
        name = self._name()
        self._expect(":")
        return Declaration(name, self.kind(), mutable)

    def declarations(self) -> list[Declaration]:
        decls: list[Declaration] = []
        while self.current.type != "end":
            decls.append(self.declaration())
            if not self._accept(","):
                break
        self.expect_end()
        return decls


def parse_kind(text: str) -> KindExpr:
    """Parse a single kind such as ``[(Usize1, Usize1); n]``."""
    parser = _Parser(text)
    node = parser.kind()
    parser.expect_end()
    return node


def parse_declarations(text: str) -> list[Declaration]:
    """Parse ``"n: usize, mut a: [i32; n]"`` into ordered declarations."""
    return _Parser(text).declarations()
