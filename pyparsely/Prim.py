import logging
from typing import Any, Callable, Optional, Tuple

from .Parsec import Parser, ParseState, ParseError, ErrorKind, T

log = logging.getLogger("pyparsely")


def succeed(value: T) -> Parser[T]:
    """Return a parser that succeeds with a value without consuming input."""
    def parse(state: ParseState) -> ParseState:
        if state.is_error:
            return state
        return state.with_result(value)
    return Parser(parse, "succeed")


def fail(msg: str) -> Parser[Any]:
    """A parser that always fails with a message."""
    def parse(state: ParseState) -> ParseState:
        if state.is_error:
            return state
        return state.with_error(ParseError.new_message(state.index, msg))
    return Parser(parse, "fail")


def lazy(thunk: Callable[[], Parser[T]]) -> Parser[T]:
    """
    Defers building a parser until it is first run.

    Needed for recursive grammars, where a rule refers to itself before it
    has been assigned.
    """
    cache = []

    def parse(state: ParseState) -> ParseState:
        if state.is_error:
            return state
        if not cache:
            cache.append(thunk())
        return cache[0](state)
    return Parser(parse, "lazy")


def _eof(state: ParseState) -> ParseState:
    if state.is_error:
        return state
    if state.index < len(state.input):
        return state.with_error(
            ParseError(ErrorKind.MESSAGE, state.index, expected="end of input", found=state.excerpt(),
                       message=f"eof: expected end of input at index {state.index}")
        )
    return state.with_result(None)


eof: Parser[None] = Parser(_eof, "eof")


def run_parser(parser: Parser[T], text: str) -> Tuple[Optional[T], Optional[ParseError]]:
    """Run `parser` over `text` and return `(result, None)` or `(None, error)`."""
    final_state = parser.run(text)
    if final_state.is_error:
        return None, final_state.error
    return final_state.result, None


# parserTraced: logs entry, success and failure of a parser
def parser_traced(label: str, p: Parser[T]) -> Parser[T]:
    def parse(state: ParseState) -> ParseState:
        if state.is_error:
            return state
        log.debug("%s: trying at index %d %r", label, state.index, state.remaining[:30])
        next_state = p(state)
        if next_state.is_error:
            log.debug("%s: failed: %s", label, next_state.error)
        else:
            log.debug("%s: matched %r, index %d -> %d", label, next_state.result, state.index, next_state.index)
        return next_state
    return Parser(parse, label)
