"""
Result Formatter for NeonCalc
Turns evaluator output into display strings
"""
import logging
import math
from decimal import Decimal

import config
from errors import EvaluationError, NonFiniteResult
from evaluator import evaluate

logger = logging.getLogger(__name__)

# Values whose decimal exponent falls in this range are written out in full
_PLAIN_MIN_EXPONENT = -7
_PLAIN_MAX_EXPONENT = 21


def format_division(value):
    """Render a division result with at most 10 decimal places.

    Trailing zeros and a bare trailing point are stripped, so whole numbers
    come back without a point and terminating decimals keep only their
    significant digits.
    """
    if not math.isfinite(value):
        return config.ERROR_TEXT
    text = f"{value:.{config.DIVISION_DECIMAL_PLACES}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def format_precise(value):
    """Render a non-division result rounded to 12 significant digits."""
    if not math.isfinite(value):
        return config.ERROR_TEXT
    rounded = float(f"{value:.{config.PRECISE_SIGNIFICANT_DIGITS}g}")
    if rounded == 0:
        return "0"
    if rounded.is_integer() and abs(rounded) < 10 ** _PLAIN_MAX_EXPONENT:
        return str(int(rounded))

    text = repr(rounded)
    if "e" not in text:
        return text
    mantissa, exponent = text.split("e")
    exponent = int(exponent)
    if _PLAIN_MIN_EXPONENT < exponent < _PLAIN_MAX_EXPONENT:
        return format(Decimal(text), "f")
    sign = "+" if exponent > 0 else "-"
    return f"{mantissa}e{sign}{abs(exponent)}"


def safe_evaluate(expr):
    """Evaluate and format an expression without raising.

    Returns None when the expression cannot be evaluated at all, the literal
    "Error" when it is well formed but has no finite value, otherwise the
    formatted result.
    """
    try:
        result = evaluate(expr)
    except NonFiniteResult:
        return config.ERROR_TEXT
    except EvaluationError as e:
        logger.debug("Cannot evaluate %r: %s", expr, e)
        return None
    if result.involves_division:
        return format_division(result.value)
    return format_precise(result.value)
