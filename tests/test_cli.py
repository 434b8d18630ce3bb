"""Tests for the procin command line: _fmt_inline and main()."""

import io
import sys
from dataclasses import dataclass

import pytest

from procin.cli import _fmt_inline, main
from procin.model import Marker


@pytest.fixture
def stdin(monkeypatch):
    def feed(data: bytes) -> None:
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))
    return feed


# ---------------------------------------------------------------------------
# _fmt_inline
# ---------------------------------------------------------------------------

def test_fmt_inline_scalars():
    assert _fmt_inline("abc") == "abc"
    assert _fmt_inline(42) == "42"
    assert _fmt_inline(b"xy") == "b'xy'"
    assert _fmt_inline(Marker) == "Marker"


def test_fmt_inline_nested():
    assert _fmt_inline([(0, 2), (2, 3)]) == "[(0, 2), (2, 3)]"
    assert _fmt_inline([["a", "b"]]) == "[[a, b]]"


def test_fmt_inline_dataclass():
    @dataclass
    class Pt:
        x: int
        y: int

    assert _fmt_inline(Pt(1, -2)) == "Pt(x=1, y=-2)"


# ---------------------------------------------------------------------------
# main
# ---------------------------------------------------------------------------

def test_tokens_command(stdin, capsys):
    stdin(b"  a bb\r\n\tccc\n")
    assert main(["tokens"]) == 0
    assert capsys.readouterr().out == "a\nbb\nccc\n"


def test_read_command(stdin, capsys):
    stdin(b"4 1 3 3 4 6 1 5 3\n")
    assert main(["read", "n: usize, edges: [(Usize1, Usize1); n]"]) == 0
    assert capsys.readouterr().out == "n = 4\nedges = [(0, 2), (2, 3), (5, 0), (4, 2)]\n"


def test_read_with_forced_strategy(stdin, capsys):
    stdin(b"1\n2\n")
    assert main(["--strategy", "line", "read", "a: [i32; 2]"]) == 0
    assert capsys.readouterr().out == "a = [1, 2]\n"


def test_read_error_exit_status(stdin, capsys):
    stdin(b"0\n")
    assert main(["read", "i: Usize1"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "index underflow" in captured.err


def test_exhausted_error(stdin, capsys):
    stdin(b"")
    assert main(["read", "n: usize"]) == 1
    assert "input exhausted" in capsys.readouterr().err


def test_bad_spec(stdin, capsys):
    stdin(b"1")
    assert main(["read", "n usize"]) == 1
    assert "expected ':'" in capsys.readouterr().err


def test_missing_command():
    with pytest.raises(SystemExit):
        main([])


def test_text_only_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("3 x\n"))
    assert main(["read", "n: usize, c: char"]) == 0
    assert capsys.readouterr().out == "n = 3\nc = x\n"


def test_bad_strategy_in_environment(monkeypatch, stdin, capsys):
    monkeypatch.setenv("PROCIN_STRATEGY", "bogus")
    stdin(b"1")
    assert main(["tokens"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "unknown source strategy 'bogus'" in captured.err
