import pytest

from qbank.grader import MAX_GRADER_LEN, is_valid_grader_expression


@pytest.mark.parametrize(
    "expr",
    ["correct / total", "2^3 + 1", "(correct - wrong) / total", "points * 2", "42"],
)
def test_valid_expressions(expr):
    assert is_valid_grader_expression(expr) is True


@pytest.mark.parametrize("expr", ["notValid(}", "1 +", "(correct", "", "   ", "return 42;"])
def test_invalid_expressions(expr):
    assert is_valid_grader_expression(expr) is False


def test_overlong_expression_rejected():
    assert is_valid_grader_expression("1+" * MAX_GRADER_LEN + "1") is False


def test_non_string_rejected():
    assert is_valid_grader_expression(None) is False
