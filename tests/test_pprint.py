import pytest

from pexpr.debug_utils.pprint import (
    COLOR_ERROR,
    COLOR_NUMBER,
    COLOR_STRING,
    RESET,
    format_error,
    format_value,
)
from pexpr.errors import PexprCastError


@pytest.mark.parametrize(
    "value,text",
    [
        (1, "1"),
        (1.5, "1.5"),
        ("hi", '"hi"'),
        ("", '""'),
        (True, "true"),
        (False, "false"),
        ([], "[ ]"),
        ([1, 2, 3], "[ 1 2 3 ]"),
        (["a", 1, True], '[ "a" 1 true ]'),
    ],
)
def test_format_value(value, text):
    assert format_value(value) == text


def test_format_value_with_color():
    assert format_value(1, color=True) == f"{COLOR_NUMBER}1{RESET}"
    assert format_value(["a"], color=True) == f'[ {COLOR_STRING}"a"{RESET} ]'


def test_format_error():
    err = PexprCastError('"a" cannot be cast to an integer.')
    assert format_error(err) == '"a" cannot be cast to an integer.'
    assert format_error(err, color=True) == f'{COLOR_ERROR}"a" cannot be cast to an integer.{RESET}'
