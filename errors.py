"""
Error types for NeonCalc
"""


class CalculatorError(Exception):
    """Base class for every failure raised by NeonCalc code."""


class EvaluationError(CalculatorError):
    """The expression evaluator could not produce a value."""


class ExpressionSyntaxError(EvaluationError):
    """Malformed token sequence: unmatched paren, unexpected token or premature end."""


class DivisionByZero(EvaluationError):
    pass


class NegativeSqrt(EvaluationError):
    pass


class NonFiniteResult(EvaluationError):
    """The expression is well formed but its value is infinite or not a number."""


class InvalidOperand(CalculatorError):
    """A compute service operand is not an integer."""


class RemoteUnavailable(CalculatorError):
    """The remote compute service could not be reached or answered garbage."""


class RemoteRejected(RemoteUnavailable):
    """The remote compute service refused the request (e.g. divide by zero)."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code
