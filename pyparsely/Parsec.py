from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Generic, List, Optional, TypeVar, Union

T = TypeVar('T')  # Generic type for parser results
U = TypeVar('U')

_FOUND_PREVIEW = 30


class ErrorKind(Enum):
    END_OF_INPUT = "end_of_input"
    LITERAL_MISMATCH = "literal_mismatch"
    CLASS_MISMATCH = "class_mismatch"
    NO_ALTERNATIVE = "no_alternative"
    REPETITION_UNMET = "repetition_unmet"
    MESSAGE = "message"


@dataclass(frozen=True)
class ParseError:
    """
    A parse failure described as data.

    `position` is the cursor of the failing state, `expected` names what the
    failing parser wanted and `found` holds the unconsumed input at that point.
    Text is only produced by `str()`.
    """
    kind: ErrorKind
    position: int
    expected: str = ""
    found: str = ""
    message: str = ""

    @staticmethod
    def new_message(position: int, message: str) -> 'ParseError':
        return ParseError(ErrorKind.MESSAGE, position, message=message)

    def __str__(self) -> str:
        if self.kind is ErrorKind.END_OF_INPUT:
            return f"{self.expected}: got unexpected end of input at index {self.position}"
        if self.kind is ErrorKind.LITERAL_MISMATCH:
            return (f"string: tried to match {self.expected!r} at index {self.position}, "
                    f"but got {self.found!r}")
        if self.kind is ErrorKind.CLASS_MISMATCH:
            return (f"{self.expected}: couldn't match {self.expected} at index {self.position}, "
                    f"got {self.found!r}")
        if self.kind is ErrorKind.NO_ALTERNATIVE:
            return f"choice: unable to match with any parser at index {self.position}"
        if self.kind is ErrorKind.REPETITION_UNMET:
            return f"many1: unable to match any input using parser at index {self.position}"
        return self.message


@dataclass(frozen=True)
class ParseState:
    """Parser state: the source text, the cursor, and the outcome of the last step."""
    input: str
    index: int = 0
    result: Any = None
    is_error: bool = False
    error: Optional[ParseError] = None

    @property
    def remaining(self) -> str:
        return self.input[self.index:]

    def excerpt(self) -> str:
        """The next few unconsumed characters, for error messages."""
        text = self.input[self.index:self.index + _FOUND_PREVIEW + 1]
        if len(text) > _FOUND_PREVIEW:
            return text[:_FOUND_PREVIEW] + "..."
        return text

    def advance(self, index: int, result: Any) -> 'ParseState':
        return replace(self, index=index, result=result)

    def with_result(self, result: Any) -> 'ParseState':
        return replace(self, result=result)

    def with_error(self, error: ParseError) -> 'ParseState':
        return replace(self, is_error=True, error=error)


ParseFn = Callable[[ParseState], ParseState]
ErrorMapFn = Callable[[ParseError, int], Union[ParseError, str]]


class Parser(Generic[T]):
    """A parser combinator: an immutable transition from one ParseState to the next."""
    def __init__(self, parse_fn: ParseFn, name: str = ""):
        self.parse_fn = parse_fn
        self.name = name

    def __call__(self, state: ParseState) -> ParseState:
        return self.parse_fn(state)

    def __repr__(self) -> str:
        return f"Parser({self.name})" if self.name else "Parser()"

    def run(self, text: str) -> ParseState:
        """Parse `text` from index 0 and return the final state."""
        return self(ParseState(text))

    # Functor (<$>)
    def map(self, f: Callable[[T], U]) -> 'Parser[U]':
        def parse(state: ParseState) -> ParseState:
            if state.is_error:
                return state
            next_state = self(state)
            if next_state.is_error:
                return next_state
            return next_state.with_result(f(next_state.result))
        return Parser(parse, self.name)

    # Monadic bind (>>=)
    def chain(self, f: Callable[[T], 'Parser[U]']) -> 'Parser[U]':
        def parse(state: ParseState) -> ParseState:
            if state.is_error:
                return state
            next_state = self(state)
            if next_state.is_error:
                return next_state

            next_parser = f(next_state.result)
            if not isinstance(next_parser, Parser):
                raise TypeError(
                    f"chain: continuation must return a Parser, got {type(next_parser).__name__}"
                )
            return next_parser(next_state)
        return Parser(parse)

    def error_map(self, f: ErrorMapFn) -> 'Parser[T]':
        """
        Rewrite the error of a failed parse with `f(error, index)`.

        A plain string returned by `f` becomes a MESSAGE error at the same index.
        Successful states, and error states handed in from an earlier step,
        pass through untouched.
        """
        return Parser(self._rewrite_error(f), self.name)

    errorMap = error_map

    # Label (<?>)
    def label(self, name: str) -> 'Parser[T]':
        return Parser(self._rewrite_error(lambda _, index: f"expected {name} at index {index}"), name)

    def _rewrite_error(self, f: ErrorMapFn) -> ParseFn:
        def parse(state: ParseState) -> ParseState:
            if state.is_error:
                return state
            next_state = self(state)
            if not next_state.is_error:
                return next_state

            new_error = f(next_state.error, next_state.index)
            if isinstance(new_error, str):
                new_error = ParseError.new_message(next_state.index, new_error)
            return next_state.with_error(new_error)
        return parse

    # Alternative (<|>)
    def __or__(self, other: 'Parser[T]') -> 'Parser[T]':
        from .Combinators import choice
        return choice([self, other])

    # Sequence, collecting both results
    def __add__(self, other: 'Parser[Any]') -> 'Parser[List[Any]]':
        from .Combinators import sequence_of
        return sequence_of([self, other])

    # Monadic bind also available as >>
    def __rshift__(self, f: Callable[[T], 'Parser[U]']) -> 'Parser[U]':
        return self.chain(f)
