import pytest

from pexpr import errors
from pexpr.interpreter import evaluate


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(def x 5)", 5),
        ("(def x 5) x", 5),
        ("(def x 5) (plus x 1)", 6),
        ("(plus (def x 5) x)", 10),
        ('(def s "hi") (concat s s)', "hihi"),
        ("(def flag true) (if flag 1 2)", 1),
        ("(def x 1) (def x 2) x", 2),
        ("(def half .5) (plus half half)", 1.0),
    ],
)
def test_definitions(source, expected):
    assert evaluate(source) == expected


@pytest.mark.parametrize(
    "source",
    [
        "(def x)",
        "(def x",
        "(def 5 5)",
        "(def x y)",
        "(def x 1 2)",
        "(def x [1])",
        "(def x (plus 1 2))",
    ],
)
def test_malformed_definitions(source):
    with pytest.raises(errors.PexprDefinitionError):
        evaluate(source)


def test_definition_error_is_a_syntax_error():
    with pytest.raises(errors.PexprSyntaxError):
        evaluate("(def x)")


def test_undefined_constant():
    with pytest.raises(errors.PexprUndefinedConstant) as exc:
        evaluate("(plus y 1)")
    assert exc.value.message == "Evaluation error: undefined constant y"
    assert exc.value.offset == 6


def test_constants_are_not_functions():
    with pytest.raises(errors.PexprInvalidFunction):
        evaluate("(def x 5) (x)")


@pytest.mark.parametrize(
    "source,expected",
    [
        ("[1 2 3]", [1, 2, 3]),
        ('["a" 1.5 true]', ["a", 1.5, True]),
        ("[]", []),
        ("(length [1 2 3])", 3),
        ("(length [])", 0),
        ("(equals [1 2] [1 2])", True),
        ("(equals [1 2] [2 1])", False),
        ('(equals ["a"] ["a"])', True),
        ("(equals [1] 1)", False),
        ("(equals [1] [1.])", True),
        ("(if true [1] [2])", [1]),
        ("(string [1 2])", "1,2"),
    ],
)
def test_arrays(source, expected):
    assert evaluate(source) == expected


@pytest.mark.parametrize(
    "source,message",
    [
        ("[[1]]", "Parsing error: trying to make an array within an array"),
        ("]", "Parsing error: trying to close a non-existent array"),
        ("[(plus 1 2)]", "Parsing error: trying to create an expression in an array"),
        ("(length [1 2)]", "Parsing error: trying to evaluate an expression in an array"),
        ("[1 2", "Parsing error: unterminated array"),
    ],
)
def test_array_structure_errors(source, message):
    with pytest.raises(errors.PexprSyntaxError) as exc:
        evaluate(source)
    assert exc.value.message == message
