import json
import logging
from dataclasses import asdict

from pyparsely import between, choice, digits, letters, sequence_of, string
from pyparsely.Parsec import ParseState

logger = logging.getLogger(__name__)


def log_state(state: ParseState) -> None:
    """Dump a final parse state as indented JSON."""
    data = asdict(state)
    data["error"] = str(state.error) if state.error else None
    logger.info("%s", json.dumps(data, indent=2, default=str))


# Grammar: plain words, integers and dice rolls such as "2d6"
string_parser = letters.map(lambda result: {"type": "string", "value": result})

number_parser = digits.map(lambda result: {"type": "number", "value": int(result)})

diceroll_parser = sequence_of([digits, string("d"), digits]).map(
    lambda results: {"type": "diceroll", "value": [int(results[0]), int(results[2])]}
)

between_brackets = between(string("("), string(")"))

# A diceroll has to be tried before a bare number, which would match its prefix
expression = between_brackets(choice([diceroll_parser, number_parser, string_parser]))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    for text in ["(hello)", "(42)", "(2d6)", "(2d)"]:
        log_state(expression.run(text))
