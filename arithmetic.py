"""
Two-operand arithmetic for NeonCalc

Shared by the live preview, the compute service and the offline fallback so
all three agree on one rounding point: operand text is parsed exactly and
truncated toward zero to an int before + - *, while the displayed quotient
of a division always uses the untruncated operands.
"""
from decimal import Decimal, InvalidOperation

import config
from errors import DivisionByZero
from formatter import format_division

OPERATORS = ("+", "-", "*", "/")

# Pretty-printed symbols used in expression trails
OPERATOR_SYMBOLS = {
    "+": "+",
    "-": "−",
    "*": "×",
    "/": "÷",
}

# Symbols accepted from buttons and keyboard for each operator
OPERATOR_ALIASES = {
    "+": "+",
    "-": "-",
    "−": "-",
    "*": "*",
    "×": "*",
    "x": "*",
    "/": "/",
    "÷": "/",
}


def pretty_symbol(op):
    return OPERATOR_SYMBOLS[op]


def parse_operand(text):
    """Parse display text into a Decimal, or None if it is not a number."""
    try:
        value = Decimal(text)
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not value.is_finite():
        return None
    return value


def to_integer(text):
    """Truncate display text toward zero to an int, or None if not a number."""
    value = parse_operand(text)
    if value is None:
        return None
    return int(value)


def truncating_divide(x, y):
    """Integer division rounding toward zero."""
    if y == 0:
        raise DivisionByZero(f"Cannot divide {x} by zero")
    quotient = abs(x) // abs(y)
    return -quotient if (x < 0) != (y < 0) else quotient


def integer_result(op, x, y):
    if op == "+":
        return x + y
    if op == "-":
        return x - y
    if op == "*":
        return x * y
    if op == "/":
        return truncating_divide(x, y)
    raise ValueError(f"Unknown operator: {op}")


def compute_local(op, x_text, y_text):
    """Compute a two-operand result for display.

    Returns None when either operand is not a number, "Error" for division
    by zero, otherwise the display string.
    """
    x = parse_operand(x_text)
    y = parse_operand(y_text)
    if x is None or y is None:
        return None
    if op == "/":
        if y == 0:
            return config.ERROR_TEXT
        return format_division(float(x) / float(y))
    return str(integer_result(op, int(x), int(y)))
