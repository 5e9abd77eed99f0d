"""
Compute Service for NeonCalc
Integer add/subtract/multiply/divide with a history side effect

Backs the REST API and doubles as the offline fallback for the desktop app.
"""
import logging

from arithmetic import integer_result, pretty_symbol
from errors import InvalidOperand

logger = logging.getLogger(__name__)


def _require_int(name, value):
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidOperand(f"{name} must be an integer, got {value!r}")
    return value


class ComputeService:
    def __init__(self, history_manager):
        self.history_manager = history_manager

    def _run(self, op, x, y):
        x = _require_int("x", x)
        y = _require_int("y", y)
        result = integer_result(op, x, y)
        expression = f"{x} {pretty_symbol(op)} {y}"
        self.history_manager.add_calculation(expression, str(result))
        logger.info("%s = %s", expression, result)
        return {"result": result, "expression": expression}

    def add(self, x, y):
        return self._run("+", x, y)

    def subtract(self, x, y):
        return self._run("-", x, y)

    def multiply(self, x, y):
        return self._run("*", x, y)

    def divide(self, x, y):
        """Truncating division; raises DivisionByZero when y is 0"""
        return self._run("/", x, y)

    def get_history(self, days=None):
        return self.history_manager.get_history(days)

    def clear_history(self):
        self.history_manager.clear_calculation_history()
