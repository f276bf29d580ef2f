# tests/test_parsec.py
import dataclasses

import pytest
from hypothesis import given, strategies as st

from pyparsely.Parsec import ErrorKind, ParseError, Parser, ParseState
from pyparsely.Char import digits, letters, string
from pyparsely.Prim import fail, succeed

from conftest import assert_state_eq


# --- ParseState ---

def test_run_builds_initial_state():
    seen = []

    def spy(state):
        seen.append(state)
        return state

    final = Parser(spy).run("abc")
    assert seen == [ParseState("abc", 0, None, False, None)]
    assert final.index == 0
    assert final.result is None
    assert final.is_error is False
    assert final.error is None


def test_state_is_frozen():
    state = ParseState("abc")
    with pytest.raises(dataclasses.FrozenInstanceError):
        state.index = 2


def test_state_derivation_leaves_original_untouched():
    state = ParseState("abc")
    advanced = state.advance(2, "ab")
    failed = advanced.with_error(ParseError.new_message(2, "boom"))

    assert (state.index, state.result) == (0, None)
    assert (advanced.index, advanced.result, advanced.is_error) == (2, "ab", False)
    assert failed.is_error and failed.index == 2
    assert advanced.remaining == "c"


def test_custom_parser_extension_point():
    def any_one(state):
        if state.is_error:
            return state
        if state.index >= len(state.input):
            return state.with_error(ParseError(ErrorKind.END_OF_INPUT, state.index, expected="any"))
        return state.advance(state.index + 1, state.input[state.index])

    p = Parser(any_one, "any")
    assert p.run("xy").result == "x"
    assert p.run("").is_error
    assert repr(p) == "Parser(any)"


# --- map ---

def test_map_transforms_result_only():
    res = digits.map(int).run("42abc")
    assert res.result == 42
    assert res.index == 2


def test_map_not_called_on_error():
    calls = []
    res = digits.map(lambda x: calls.append(x)).run("abc")
    assert res.is_error
    assert calls == []
    assert res == digits.run("abc")


def test_map_exceptions_propagate():
    def boom(_):
        raise ZeroDivisionError("boom")

    with pytest.raises(ZeroDivisionError):
        digits.map(boom).run("1")


@given(st.text(alphabet="ab12 ", max_size=20))
def test_map_composition(text):
    f = lambda x: x + "!"
    g = lambda x: len(x)
    p = letters
    assert_state_eq(p.map(f).map(g).run(text), p.map(lambda x: g(f(x))).run(text))


# --- chain ---

def test_chain_context_sensitive():
    # "3:abc" -> a length prefix decides what follows
    def field(n):
        return string("a" * int(n)) if int(n) else succeed("")

    p = digits.chain(lambda n: string(":").chain(lambda _: field(n)))
    res = p.run("3:aaab")
    assert res.result == "aaa"
    assert res.index == 5

    short = p.run("3:aab")
    assert short.is_error
    assert short.index == 2


def test_chain_short_circuits():
    calls = []
    res = digits.chain(lambda x: calls.append(x) or succeed(x)).run("xyz")
    assert res.is_error
    assert calls == []


def test_chain_starts_from_advanced_state():
    res = (letters >> (lambda _: digits)).run("ab12")
    assert res.result == "12"
    assert res.index == 4


def test_chain_requires_parser():
    with pytest.raises(TypeError):
        letters.chain(lambda x: x).run("abc")


# --- error_map ---

def test_error_map_rewrites_message():
    p = digits.error_map(lambda err, index: f"wanted a number at {index}, {err.kind.value}")
    res = p.run("abc")
    assert res.is_error
    assert res.index == 0
    assert res.error.kind is ErrorKind.MESSAGE
    assert str(res.error) == "wanted a number at 0, class_mismatch"


def test_error_map_accepts_parse_error():
    replacement = ParseError(ErrorKind.LITERAL_MISMATCH, 0, expected="x", found="abc")
    res = digits.errorMap(lambda err, index: replacement).run("abc")
    assert res.error is replacement


def test_error_map_leaves_success_alone():
    calls = []
    res = digits.error_map(lambda e, i: calls.append(e) or "x").run("12")
    assert res.result == "12"
    assert calls == []


def test_label():
    res = digits.label("a number").run("x")
    assert str(res.error) == "expected a number at index 0"


# --- errors are data, rendered at the boundary ---

def test_error_renderings():
    assert "index 4" in str(ParseError(ErrorKind.END_OF_INPUT, 4, expected="digits"))
    assert str(ParseError(ErrorKind.NO_ALTERNATIVE, 2)) == "choice: unable to match with any parser at index 2"
    long_input = string("a").run("z" * 50)
    assert long_input.error.found == "z" * 30 + "..."
    assert str(long_input.error).endswith("'" + "z" * 30 + "...'")


def test_fail_keeps_index():
    res = (string("ab") >> (lambda _: fail("nope"))).run("abc")
    assert res.is_error
    assert res.index == 2
    assert str(res.error) == "nope"
    assert res.error.position == res.index


def test_error_map_keeps_upstream_failure():
    p = Parser(lambda s: digits.label("a number")(string("x")(s)))
    res = p.run("y1")
    assert res.is_error
    assert res.error.kind is ErrorKind.LITERAL_MISMATCH
    assert res.error.expected == "x"

    failed = ParseState("abc").with_error(ParseError.new_message(0, "earlier"))
    assert digits.error_map(lambda e, i: "rewritten")(failed) is failed
    assert digits.label("num")(failed) is failed


def test_label_names_parser():
    labelled = digits.label("a number")
    assert labelled.name == "a number"
    assert digits.name == "digits"
