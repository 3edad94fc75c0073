import pytest

from pexpr import errors
from pexpr.interpreter import evaluate


@pytest.mark.parametrize(
    "source,error,message",
    [
        ("(plus 1", errors.PexprSyntaxError, "Parsing error: parenthesis mismatch, depth:1, expected:0"),
        ("(plus 1 (plus 2 3)", errors.PexprSyntaxError, "Parsing error: parenthesis mismatch, depth:1, expected:0"),
        ("1)", errors.PexprSyntaxError, "Parsing error: too many close parenthesis"),
        ("(plus 1 2))", errors.PexprSyntaxError, "Parsing error: too many close parenthesis"),
        ("()", errors.PexprSyntaxError, "Parsing error: Cannot evaluate without a function"),
        ("", errors.PexprSyntaxError, "Parsing error: nothing to evaluate"),
        ("   ", errors.PexprSyntaxError, "Parsing error: nothing to evaluate"),
        ("(1 2)", errors.PexprSyntaxError, "Parsing error: Cannot evaluate without a function"),
        ("((plus 1 2))", errors.PexprSyntaxError, "Parsing error: Cannot evaluate without a function"),
        ("(foo 1)", errors.PexprInvalidFunction, "Evaluation error: foo is not a valid function"),
        ("(plus 1)", errors.PexprArityError, "Evaluation error: plus expects 2 arguments, but only got 1"),
        ("(if true)", errors.PexprArityError, "Evaluation error: if expects 3 arguments, but only got 1"),
        ("(length)", errors.PexprArityError, "Evaluation error: length expects 1 arguments, but only got 0"),
        ("(plus 1 true)", errors.PexprTypeError, "Evaluation error: plus expects arg 1 to be a number but it is a boolean"),
        ('(concat 1 "a")', errors.PexprTypeError, "Evaluation error: concat expects arg 0 to be a string but it is a int"),
        ("(if 1 2 3)", errors.PexprTypeError, "Evaluation error: if expects arg 0 to be a boolean but it is a int"),
        ("(int 5)", errors.PexprTypeError, "Evaluation error: int expects arg 0 to be a string but it is a int"),
        ('(int "a")', errors.PexprCastError, '"a" cannot be cast to an integer.'),
        ('(float "a")', errors.PexprCastError, '"a" cannot be cast to a float.'),
        ("(length 5)", errors.PexprDomainError, "Cannot get length of 5 as it is neither a string nor array."),
        ("(length true)", errors.PexprDomainError, "Cannot get length of true as it is neither a string nor array."),
    ],
)
def test_errors(source, error, message):
    with pytest.raises(error) as exc:
        evaluate(source)
    assert exc.value.message == message
    assert str(exc.value) == message


def test_all_errors_share_a_base():
    for cls in (
        errors.PexprSyntaxError,
        errors.PexprDefinitionError,
        errors.PexprUndefinedConstant,
        errors.PexprInvalidFunction,
        errors.PexprArityError,
        errors.PexprTypeError,
        errors.PexprCastError,
        errors.PexprDomainError,
    ):
        assert issubclass(cls, errors.PexprError)


@pytest.mark.parametrize(
    "source,offset",
    [
        ("1)", 1),
        ("(plus 1 (foo 2))", 9),
        ('(plus 1 (int "x"))', 9),
        ("[1 [2]]", 3),
    ],
)
def test_errors_carry_source_offsets(source, offset):
    with pytest.raises(errors.PexprError) as exc:
        evaluate(source)
    assert exc.value.offset == offset


def test_mismatch_has_no_offset():
    with pytest.raises(errors.PexprSyntaxError) as exc:
        evaluate("(plus 1 2")
    assert exc.value.offset is None
