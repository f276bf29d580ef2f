# tests/conftest.py
import pytest

from pyparsely.Parsec import ParseState


def assert_state_eq(s1: ParseState, s2: ParseState):
    """
    Compare the observable outcome of two final states.
    """
    assert s1.is_error == s2.is_error, f"Outcome mismatch: {s1.is_error} != {s2.is_error}"
    assert s1.index == s2.index, f"Index mismatch: {s1.index} != {s2.index}"
    if s1.is_error:
        assert s1.error == s2.error
    else:
        assert s1.result == s2.result


@pytest.fixture
def initial_state():
    def _make(input_data, index=0):
        return ParseState(input_data, index)

    return _make
