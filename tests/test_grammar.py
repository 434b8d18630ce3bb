"""Tests for procin.grammar."""

import pytest

from procin.environment import Environment
from procin.errors import KindError, KindSyntaxError, UnboundNameError, UnknownKindError
from procin.grammar import (
    BinOp,
    Declaration,
    NamedKind,
    Num,
    Ref,
    SequenceOf,
    TupleOf,
    parse_declarations,
    parse_kind,
    tokenize,
)
from procin.model import I32, U32, USIZE, USIZE1, SeqKind, TupleKind


# ---------------------------------------------------------------------------
# tokenize
# ---------------------------------------------------------------------------

def test_tokenize_kinds():
    lexemes = tokenize("[i32; n]")
    assert [(x.type, x.value) for x in lexemes] == [
        ("punct", "["),
        ("name", "i32"),
        ("punct", ";"),
        ("name", "n"),
        ("punct", "]"),
        ("end", ""),
    ]


def test_tokenize_columns():
    lexemes = tokenize("  a: u8")
    assert [x.column for x in lexemes] == [3, 4, 6, 8]


def test_tokenize_bad_character():
    with pytest.raises(KindSyntaxError) as info:
        tokenize("a: u8 & b")
    assert info.value.column == 7


# ---------------------------------------------------------------------------
# parse_kind
# ---------------------------------------------------------------------------

class TestParseKind:
    def test_scalar(self):
        assert parse_kind("usize") == NamedKind("usize")

    def test_tuple(self):
        assert parse_kind("(u8, u32, i32)") == TupleOf(
            (NamedKind("u8"), NamedKind("u32"), NamedKind("i32"))
        )

    def test_single_and_empty_tuple(self):
        assert parse_kind("(u8,)") == TupleOf((NamedKind("u8"),))
        assert parse_kind("()") == TupleOf(())

    def test_sequence(self):
        assert parse_kind("[i32; n]") == SequenceOf(NamedKind("i32"), Ref("n"))

    def test_nested(self):
        node = parse_kind("[([u32; m], i32); n]")
        assert node == SequenceOf(
            TupleOf((SequenceOf(NamedKind("u32"), Ref("m")), NamedKind("i32"))),
            Ref("n"),
        )

    def test_length_expression_precedence(self):
        node = parse_kind("[i32; n - 1 + 2 * m]")
        assert node.length == BinOp(
            "+", BinOp("-", Ref("n"), Num(1)), BinOp("*", Num(2), Ref("m"))
        )

    def test_parenthesized_length(self):
        node = parse_kind("[i32; (n + 1) / 2]")
        assert node.length == BinOp("/", BinOp("+", Ref("n"), Num(1)), Num(2))

    @pytest.mark.parametrize(
        "text",
        ["", "[i32 n]", "[i32; ]", "(u8 u8)", "u8 u8", "[i32; n", "(u8,", ";"],
    )
    def test_syntax_errors(self, text):
        with pytest.raises(KindSyntaxError):
            parse_kind(text)


# ---------------------------------------------------------------------------
# resolve
# ---------------------------------------------------------------------------

class TestResolve:
    def test_resolve_composite(self):
        env = Environment()
        env.bind("n", 4)
        kind = parse_kind("[(Usize1, Usize1); n]").resolve(env)
        assert kind == SeqKind(TupleKind((USIZE1, USIZE1)), 4)

    def test_resolve_arithmetic(self):
        env = Environment()
        env.bind("n", 7)
        env.bind("m", 3)
        assert parse_kind("[u32; (n + 1) / 2 - m * 1]").resolve(env) == SeqKind(U32, 1)

    def test_literal_length(self):
        assert parse_kind("[i32; 3]").resolve(Environment()) == SeqKind(I32, 3)

    def test_unbound_length(self):
        with pytest.raises(UnboundNameError):
            parse_kind("[i32; n]").resolve(Environment())

    def test_non_integer_length(self):
        env = Environment()
        env.bind("s", "abc")
        with pytest.raises(KindError, match="non-integer"):
            parse_kind("[i32; s]").resolve(env)

    def test_negative_length(self):
        env = Environment()
        env.bind("n", 0)
        with pytest.raises(KindError, match="non-negative"):
            parse_kind("[i32; n - 1]").resolve(env)

    def test_division_by_zero(self):
        with pytest.raises(KindError, match="division by zero"):
            parse_kind("[i32; 4 / 0]").resolve(Environment())

    def test_unknown_name(self):
        with pytest.raises(UnknownKindError):
            parse_kind("(usize, Widget)").resolve(Environment())


# ---------------------------------------------------------------------------
# parse_declarations
# ---------------------------------------------------------------------------

class TestDeclarations:
    def test_basic(self):
        decls = parse_declarations("n: usize, a: [i32; n]")
        assert decls == [
            Declaration("n", NamedKind("usize")),
            Declaration("a", SequenceOf(NamedKind("i32"), Ref("n"))),
        ]

    def test_mut_and_trailing_comma(self):
        decls = parse_declarations("mut n: usize,\n m: u32,")
        assert [(d.name, d.mutable) for d in decls] == [("n", True), ("m", False)]

    def test_variable_named_mut(self):
        decls = parse_declarations("mut: usize")
        assert decls == [Declaration("mut", NamedKind("usize"))]

    def test_empty(self):
        assert parse_declarations("  ") == []

    @pytest.mark.parametrize("text", ["n usize", "n: usize m: u32", ": usize", "n: usize,,"])
    def test_errors(self, text):
        with pytest.raises(KindSyntaxError):
            parse_declarations(text)

    def test_resolves_against_earlier_bindings(self):
        decls = parse_declarations("n: usize, a: [usize; n]")
        env = Environment()
        assert decls[0].kind.resolve(env) is USIZE
        env.bind("n", 2)
        assert decls[1].kind.resolve(env) == SeqKind(USIZE, 2)
