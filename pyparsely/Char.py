import re
from typing import Union

from .Parsec import Parser, ParseState, ParseError, ErrorKind


# string: Parses an exact literal
def string(s: str) -> Parser[str]:
    """Parses the exact, case-sensitive literal s and returns it."""
    if not s:
        raise ValueError("string: literal must not be empty")

    def parse(state: ParseState) -> ParseState:
        if state.is_error:
            return state

        index = state.index
        if index >= len(state.input):
            return state.with_error(ParseError(ErrorKind.END_OF_INPUT, index, expected=f"string {s!r}"))

        if state.input.startswith(s, index):
            return state.advance(index + len(s), s)

        return state.with_error(
            ParseError(ErrorKind.LITERAL_MISMATCH, index, expected=s, found=state.excerpt())
        )
    return Parser(parse, f"string({s!r})")


# regex: Parses the longest match of a pattern anchored at the cursor
def regex(pattern: Union[str, re.Pattern], name: str) -> Parser[str]:
    """
    Matches `pattern` at the current index and returns the matched text.

    The match is anchored with `Pattern.match(input, index)` so the input is
    never sliced. A zero-length match is treated as a failure, which keeps
    every primitive consuming.
    """
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern

    def parse(state: ParseState) -> ParseState:
        if state.is_error:
            return state

        index = state.index
        if index >= len(state.input):
            return state.with_error(ParseError(ErrorKind.END_OF_INPUT, index, expected=name))

        match = compiled.match(state.input, index)
        if match is None or match.end() == index:
            return state.with_error(
                ParseError(ErrorKind.CLASS_MISMATCH, index, expected=name, found=state.excerpt())
            )
        return state.advance(match.end(), match.group(0))
    return Parser(parse, name)


# letters: one or more ASCII letters
letters: Parser[str] = regex(r"[A-Za-z]+", "letters")

# digits: one or more decimal digits
digits: Parser[str] = regex(r"[0-9]+", "digits")
