import pytest

from errors import DivisionByZero, ExpressionSyntaxError, NegativeSqrt, NonFiniteResult
from evaluator import Parser, evaluate
from tokenizer import tokenize


def test_precedence():
    result = evaluate("2+3*4")
    assert result.value == 14
    assert result.involves_division is False


def test_parentheses():
    assert evaluate("2*(3+4)").value == 14
    assert evaluate("((((1))))").value == 1


def test_division_flag_covers_whole_expression():
    result = evaluate("10/3+1")
    assert result.involves_division is True


def test_percent_is_not_division():
    result = evaluate("200*10%")
    assert result.value == 20
    assert result.involves_division is False


def test_percent_on_left_operand():
    assert evaluate("50%").value == 0.5
    assert evaluate("50%+2").value == 2.5


def test_division_by_zero():
    with pytest.raises(DivisionByZero):
        evaluate("5/0")
    with pytest.raises(DivisionByZero):
        evaluate("5/(2-2)")


def test_negative_sqrt():
    with pytest.raises(NegativeSqrt):
        evaluate("√(-1)")


def test_sqrt():
    assert evaluate("√16").value == 4
    assert evaluate("√(9+16)").value == 5


def test_unary_minus():
    assert evaluate("-(-3)").value == 3
    assert evaluate("2*-3").value == -6


def test_chained_power_folds_left_to_right():
    # each '^' takes only the unary right after it
    assert evaluate("2^3^2").value == 64


def test_unary_minus_binds_tighter_than_power():
    assert evaluate("-2^2").value == 4


def test_power_overflow_is_non_finite():
    with pytest.raises(NonFiniteResult):
        evaluate("10^400")
    with pytest.raises(NonFiniteResult):
        evaluate("0^-1")


@pytest.mark.parametrize("expr", ["(2+3", "2+", "2 3", "1.2.3", "", ")", "3%%", "*2"])
def test_syntax_errors(expr):
    with pytest.raises(ExpressionSyntaxError):
        evaluate(expr)


def test_deep_nesting_is_a_syntax_error():
    with pytest.raises(ExpressionSyntaxError):
        evaluate("(" * 5000 + "1" + ")" * 5000)


def test_parser_tracks_position():
    parser = Parser(tokenize("1+2"))
    assert parser.parse() == 3
    assert parser.pos == 3
    assert parser.peek() is None
