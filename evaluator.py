"""
Expression Evaluator for NeonCalc
Recursive-descent parser for calculator expressions

Grammar, lowest to highest precedence:

    expr    := term (('+' | '-') term)*
    term    := power ('%')? (('*' | '/') power ('%')?)*
    power   := unary ('^' unary)*
    unary   := '√' unary | '-' unary | primary
    primary := NUMBER | '(' expr ')'
"""
import logging
import math
from collections import namedtuple

from errors import DivisionByZero, ExpressionSyntaxError, NegativeSqrt, NonFiniteResult
from tokenizer import LPAREN, NUMBER, OPERATOR, PERCENT, POWER, RPAREN, SQRT, tokenize

logger = logging.getLogger(__name__)

EvaluationResult = namedtuple("EvaluationResult", ["value", "involves_division"])


class Parser:
    """Holds the token list and cursor for a single evaluation."""

    def __init__(self, tokens):
        self.tokens = tokens
        self.pos = 0
        self.involves_division = False

    def peek(self):
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def consume(self):
        token = self.peek()
        if token is None:
            raise ExpressionSyntaxError("Unexpected end of expression")
        self.pos += 1
        return token

    def _at(self, kind, text=None):
        token = self.peek()
        if token is None or token.kind != kind:
            return False
        return text is None or token.text in text

    def parse(self):
        """Parse the whole token list and return its value."""
        value = self.parse_expr()
        token = self.peek()
        if token is not None:
            raise ExpressionSyntaxError(f"Unexpected token: {token.text}")
        return value

    def parse_expr(self):
        left = self.parse_term()
        while self._at(OPERATOR, "+-"):
            op = self.consume().text
            right = self.parse_term()
            left = left + right if op == "+" else left - right
        return left

    def parse_term(self):
        left = self._percent(self.parse_power())
        while self._at(OPERATOR, "*/"):
            op = self.consume().text
            right = self._percent(self.parse_power())
            if op == "*":
                left = left * right
            else:
                if right == 0:
                    raise DivisionByZero("Division by zero")
                self.involves_division = True
                left = left / right
        return left

    def _percent(self, value):
        if self._at(PERCENT):
            self.consume()
            return value / 100
        return value

    def parse_power(self):
        # Each '^' takes the unary right after it, folding left to right
        base = self.parse_unary()
        while self._at(POWER):
            self.consume()
            exponent = self.parse_unary()
            try:
                base = math.pow(base, exponent)
            except (OverflowError, ValueError):
                raise NonFiniteResult(f"{base} ^ {exponent} has no finite value") from None
        return base

    def parse_unary(self):
        if self._at(SQRT):
            self.consume()
            value = self.parse_unary()
            if value < 0:
                raise NegativeSqrt("Square root of a negative number")
            return math.sqrt(value)
        if self._at(OPERATOR, "-"):
            self.consume()
            return -self.parse_unary()
        return self.parse_primary()

    def parse_primary(self):
        token = self.consume()
        if token.kind == LPAREN:
            value = self.parse_expr()
            if not self._at(RPAREN):
                raise ExpressionSyntaxError("Missing closing parenthesis")
            self.consume()
            return value
        if token.kind == NUMBER:
            try:
                return float(token.text)
            except ValueError:
                raise ExpressionSyntaxError(f"Malformed number: {token.text}") from None
        raise ExpressionSyntaxError(f"Unexpected token: {token.text}")


def evaluate(expr):
    """Evaluate an expression string.

    Returns an EvaluationResult. Raises one of the EvaluationError subclasses
    when the expression is malformed or has no finite value; no recovery is
    attempted here.
    """
    parser = Parser(tokenize(expr))
    try:
        value = parser.parse()
    except RecursionError:
        raise ExpressionSyntaxError("Expression is nested too deeply") from None
    if not math.isfinite(value):
        raise NonFiniteResult(f"{expr} evaluates to {value}")
    logger.debug("Evaluated %r -> %r (division=%s)", expr, value, parser.involves_division)
    return EvaluationResult(value, parser.involves_division)
