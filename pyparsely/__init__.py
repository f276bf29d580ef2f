# Core
from .Parsec import Parser, ParseState, ParseError, ErrorKind
from .Prim import succeed, fail, lazy, eof, run_parser, parser_traced

# Characters
from .Char import string, regex, letters, digits

# Combinators
from .Combinators import sequence_of, choice, many, many1, between

# camelCase names
str_ = string
sequenceOf = sequence_of
