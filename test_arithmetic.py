import pytest

from arithmetic import compute_local, pretty_symbol, to_integer, truncating_divide
from errors import DivisionByZero


def test_to_integer_truncates_toward_zero():
    assert to_integer("12.9") == 12
    assert to_integer("-12.9") == -12
    assert to_integer("0.") == 0
    assert to_integer("999999999999999") == 999999999999999


def test_to_integer_rejects_non_numbers():
    assert to_integer("abc") is None
    assert to_integer("Error") is None
    assert to_integer("NaN") is None
    assert to_integer("Infinity") is None


@pytest.mark.parametrize("x, y, expected", [
    (7, 2, 3),
    (-7, 2, -3),
    (7, -2, -3),
    (-7, -2, 3),
    (6, 3, 2),
])
def test_truncating_divide(x, y, expected):
    assert truncating_divide(x, y) == expected


def test_truncating_divide_by_zero():
    with pytest.raises(DivisionByZero):
        truncating_divide(1, 0)


def test_compute_local_integer_ops_truncate_operands():
    assert compute_local("+", "2.7", "3.9") == "5"
    assert compute_local("-", "2", "5") == "-3"
    assert compute_local("*", "123456789012345", "1000") == "123456789012345000"


def test_compute_local_division_uses_full_operands():
    assert compute_local("/", "10", "3") == "3.3333333333"
    assert compute_local("/", "5", "0.5") == "10"
    assert compute_local("/", "5", "0") == "Error"


def test_compute_local_invalid_operand():
    assert compute_local("+", "x", "1") is None


def test_pretty_symbols():
    assert [pretty_symbol(op) for op in "+-*/"] == ["+", "−", "×", "÷"]
