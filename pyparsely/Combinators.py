from typing import Any, Callable, List, Optional, Sequence, overload

from .Parsec import Parser, ParseState, ParseError, ErrorKind, T


# 1. sequenceOf: Runs parsers one after another
def sequence_of(parsers: Sequence[Parser[Any]]) -> Parser[List[Any]]:
    """
    Runs each parser from the state left by the previous one and collects
    their results in order. The first failing state is returned as it is.
    """
    parsers = list(parsers)

    def parse(state: ParseState) -> ParseState:
        if state.is_error:
            return state

        results = []
        next_state = state
        for p in parsers:
            next_state = p(next_state)
            if next_state.is_error:
                return next_state
            results.append(next_state.result)
        return next_state.with_result(results)
    return Parser(parse, "sequence_of")


# 2. choice: Tries parsers in order until one succeeds
def choice(parsers: Sequence[Parser[T]]) -> Parser[T]:
    """
    Applies each parser to the same starting state and returns the first success.

    Alternatives never see input consumed by an earlier failed branch. If all
    of them fail, the error points at the starting index.
    """
    parsers = list(parsers)

    def parse(state: ParseState) -> ParseState:
        if state.is_error:
            return state

        for p in parsers:
            next_state = p(state)
            if not next_state.is_error:
                return next_state

        return state.with_error(ParseError(ErrorKind.NO_ALTERNATIVE, state.index, found=state.excerpt()))
    return Parser(parse, "choice")


def _collect(p: Parser[T], state: ParseState) -> ParseState:
    # Stops at the first failure or at the first success that does not advance.
    results = []
    next_state = state
    while True:
        attempt = p(next_state)
        if attempt.is_error or attempt.index <= next_state.index:
            break
        results.append(attempt.result)
        next_state = attempt
    return next_state.with_result(results)


# 3. many: Applies a parser zero or more times
def many(p: Parser[T]) -> Parser[List[T]]:
    """
    Applies `p` until it fails and returns the list of results. Never fails.

    `p` must consume input whenever it succeeds.
    """
    def parse(state: ParseState) -> ParseState:
        if state.is_error:
            return state
        return _collect(p, state)
    return Parser(parse, "many")


# 4. many1: Applies a parser one or more times
def many1(p: Parser[T]) -> Parser[List[T]]:
    """
    Like `many`, but fails at the starting index when `p` matches nothing.

    A success that does not advance the index is not counted as a match, so
    `p` must consume input whenever it succeeds.
    """
    def parse(state: ParseState) -> ParseState:
        if state.is_error:
            return state

        next_state = _collect(p, state)
        if not next_state.result:
            return state.with_error(
                ParseError(ErrorKind.REPETITION_UNMET, state.index, expected=p.name, found=state.excerpt())
            )
        return next_state
    return Parser(parse, "many1")


@overload
def between(left: Parser[Any], right: Parser[Any]) -> Callable[[Parser[T]], Parser[T]]: ...
@overload
def between(left: Parser[Any], right: Parser[Any], content: Parser[T]) -> Parser[T]: ...


# 5. between: Parses content surrounded by two delimiters
def between(left, right, content: Optional[Parser[Any]] = None):
    """
    Parses `left`, then the content, then `right`, returning only the content's result.

    Called with two parsers it returns a function waiting for the content
    parser, so delimiters can be bound once and reused:

        parens = between(string("("), string(")"))
        parens(letters).run("(hello)").result  # 'hello'
    """
    def wrap(inner: Parser[T]) -> Parser[T]:
        return sequence_of([left, inner, right]).map(lambda results: results[1])

    if content is not None:
        return wrap(content)
    return wrap
