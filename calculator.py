"""
Calculator Engine for NeonCalc
Turns button and key presses into calculator state transitions

The calculator is always in exactly one of five immutable states. Each
transition builds a new state; nothing else writes to it.
"""
import logging
import math
import re
from dataclasses import dataclass, field, replace
from typing import Optional

import config
from arithmetic import OPERATOR_ALIASES, compute_local, parse_operand, pretty_symbol, to_integer
from errors import RemoteUnavailable
from formatter import format_division, format_precise, safe_evaluate
from tokenizer import SQRT_SIGN

logger = logging.getLogger(__name__)

_TRAILING_NUMBER = re.compile(r"(-?)([\d.]+)$")
_UNARY_MINUS_CONTEXT = "+-*/^(" + SQRT_SIGN


@dataclass(frozen=True)
class CalculatorState:
    display: str = "0"
    expression: str = ""

    # Defaults for the fields a state does not carry
    operator = None
    operand1 = ""
    full_expression = ""
    waiting_for_operand2 = False
    just_calculated = False
    is_error = False
    expression_mode = False


@dataclass(frozen=True)
class Entering(CalculatorState):
    """Typing an operand; operand2 once an operator is pending."""
    operator: Optional[str] = None
    operand1: str = ""


@dataclass(frozen=True)
class AwaitingOperand2(CalculatorState):
    operator: str = "+"
    operand1: str = "0"

    waiting_for_operand2 = True


@dataclass(frozen=True)
class ExpressionMode(CalculatorState):
    full_expression: str = ""

    expression_mode = True


@dataclass(frozen=True)
class JustCalculated(CalculatorState):
    operand1: str = ""

    just_calculated = True


@dataclass(frozen=True)
class ErrorState(CalculatorState):
    display: str = field(default=config.ERROR_TEXT, init=False)

    is_error = True


INITIAL_STATE = Entering()


@dataclass(frozen=True)
class PendingCalculation:
    """A confirmed two-operand equals waiting on the compute service."""
    token: int
    operator: str
    x: int
    y: int
    expression: str
    local_result: Optional[str] = None


def _trailing_number(text):
    match = _TRAILING_NUMBER.search(text)
    return match.group(2) if match else ""


class Calculator:
    def __init__(self, service=None):
        self.service = service
        self.state = INITIAL_STATE
        self.calculating = False
        self._generation = 0

    def _accepts_input(self):
        if self.calculating:
            logger.debug("Input rejected while a calculation is in flight")
            return False
        return True

    def _current_value(self):
        """Numeric value of what the user is looking at, or None."""
        state = self.state
        if isinstance(state, ExpressionMode):
            shown = safe_evaluate(state.full_expression)
            if shown is None or shown == config.ERROR_TEXT:
                return None, state.full_expression
            return float(shown), state.full_expression
        value = parse_operand(state.display)
        if value is None:
            return None, state.display
        return float(value), state.display

    def _two_operand_prefix(self):
        """Current two-operand input rewritten as expression text."""
        state = self.state
        if isinstance(state, Entering) and state.operator:
            return state.operand1 + state.operator + state.display
        return state.display

    # ── Entry ────────────────────────────────────────────────────────────
    def input_digit(self, digit):
        """Add a digit to the current operand"""
        if not self._accepts_input():
            return self.state
        state = self.state
        if state.is_error or state.just_calculated:
            self.state = Entering(display=digit)
        elif isinstance(state, ExpressionMode):
            full = state.full_expression + digit
            self.state = replace(state, full_expression=full, expression=full,
                                 display=_trailing_number(full))
        elif isinstance(state, AwaitingOperand2):
            self.state = Entering(display=digit, expression=state.expression,
                                  operator=state.operator, operand1=state.operand1)
        else:
            new_display = digit if state.display == "0" else state.display + digit
            digits = new_display[1:] if new_display.startswith("-") else new_display
            if len(digits) <= config.MAX_INPUT_DIGITS:
                self.state = replace(state, display=new_display)
        return self.state

    def input_decimal(self):
        """Add a decimal point to the current operand"""
        if not self._accepts_input():
            return self.state
        state = self.state
        if state.is_error:
            self.state = INITIAL_STATE
        elif state.just_calculated:
            self.state = Entering(display="0.")
        elif isinstance(state, ExpressionMode):
            if "." not in _trailing_number(state.full_expression):
                full = state.full_expression + "."
                self.state = replace(state, full_expression=full, expression=full,
                                     display=_trailing_number(full))
        elif isinstance(state, AwaitingOperand2):
            self.state = Entering(display="0.", expression=state.expression,
                                  operator=state.operator, operand1=state.operand1)
        elif "." not in state.display:
            self.state = replace(state, display=state.display + ".")
        return self.state

    def set_operator(self, op):
        """Set the pending two-operand operator"""
        if not self._accepts_input():
            return self.state
        op = OPERATOR_ALIASES[op]
        state = self.state
        if state.is_error:
            self.state = INITIAL_STATE
        elif isinstance(state, ExpressionMode):
            full = state.full_expression + op
            self.state = replace(state, full_expression=full, expression=full)
        else:
            operand1 = state.operand1 if isinstance(state, AwaitingOperand2) else state.display
            self.state = AwaitingOperand2(display=operand1, operand1=operand1, operator=op,
                                          expression=f"{operand1} {pretty_symbol(op)}")
        return self.state

    # ── Expression syntax ────────────────────────────────────────────────
    def open_paren(self):
        if not self._accepts_input():
            return self.state
        state = self.state
        if state.is_error:
            return state
        if state.just_calculated:
            self.state = ExpressionMode(full_expression="(", display="0", expression="(")
            return self.state
        if isinstance(state, ExpressionMode):
            full = state.full_expression
            if full and (full[-1].isdigit() or full[-1] in ".)%"):
                full += "*"
        elif isinstance(state, AwaitingOperand2):
            full = state.operand1 + state.operator
        elif state.operator:
            full = state.operand1 + state.operator
            if state.display != "0":
                full += state.display + "*"
        else:
            full = state.display + "*" if state.display != "0" else ""
        full += "("
        self.state = ExpressionMode(full_expression=full, expression=full, display=state.display)
        return self.state

    def close_paren(self):
        if not self._accepts_input():
            return self.state
        state = self.state
        if isinstance(state, ExpressionMode):
            full = state.full_expression + ")"
            self.state = replace(state, full_expression=full, expression=full)
        return self.state

    def power(self):
        """Start (or continue) an expression with a '^'"""
        if not self._accepts_input():
            return self.state
        state = self.state
        if state.is_error:
            return state
        if isinstance(state, ExpressionMode):
            full = state.full_expression + "^"
            self.state = replace(state, full_expression=full, expression=full)
            return self.state
        if isinstance(state, AwaitingOperand2):
            base = state.operand1   # '^' replaces the pending operator
        elif state.just_calculated:
            base = state.display
        else:
            base = self._two_operand_prefix()
        full = base + "^"
        self.state = ExpressionMode(full_expression=full, expression=full, display=state.display)
        return self.state

    def percent(self):
        if not self._accepts_input():
            return self.state
        state = self.state
        if state.is_error:
            return state
        if isinstance(state, ExpressionMode):
            full = state.full_expression + "%"
            self.state = replace(state, full_expression=full, expression=full)
            return self.state
        value = parse_operand(state.display)
        if value is None:
            return state
        shown = format_precise(float(value) / 100)
        if isinstance(state, AwaitingOperand2):
            self.state = Entering(display=shown, expression=state.expression,
                                  operator=state.operator, operand1=state.operand1)
        elif state.just_calculated:
            self.state = Entering(display=shown)
        else:
            self.state = replace(state, display=shown)
        return self.state

    # ── Unary functions ──────────────────────────────────────────────────
    def _apply_function(self, label, compute):
        if not self._accepts_input():
            return self.state
        if self.state.is_error:
            return self.state
        value, source = self._current_value()
        if value is None:
            return self.state
        trail = label.format(source)
        result = compute(value)
        if result is None or not math.isfinite(result):
            self.state = ErrorState(expression=trail)
        else:
            self.state = JustCalculated(display=format_precise(result), expression=trail,
                                        operand1=format_precise(result))
        return self.state

    def square(self):
        return self._apply_function("({})²", lambda v: v * v)

    def sqrt(self):
        return self._apply_function(SQRT_SIGN + "({})", lambda v: math.sqrt(v) if v >= 0 else None)

    def reciprocal(self):
        return self._apply_function("1/({})", lambda v: 1 / v if v != 0 else None)

    def negate(self):
        if not self._accepts_input():
            return self.state
        state = self.state
        if state.is_error or isinstance(state, AwaitingOperand2):
            return state
        if isinstance(state, ExpressionMode):
            full = state.full_expression
            match = _TRAILING_NUMBER.search(full)
            if not match:
                return state
            sign_at = match.start(1)
            unary = match.group(1) and (sign_at == 0 or full[sign_at - 1] in _UNARY_MINUS_CONTEXT)
            if unary:
                full = full[:sign_at] + full[sign_at + 1:]
            else:
                full = full[:match.start(2)] + "-" + match.group(2)
            self.state = replace(state, full_expression=full, expression=full)
            return self.state
        if state.display == "0":
            return state
        if state.display.startswith("-"):
            negated = state.display[1:]
        else:
            negated = "-" + state.display
        if state.just_calculated:
            self.state = replace(state, display=negated, operand1=negated)
        else:
            self.state = replace(state, display=negated)
        return self.state

    # ── Editing ──────────────────────────────────────────────────────────
    def backspace(self):
        if not self._accepts_input():
            return self.state
        state = self.state
        if state.is_error or state.just_calculated:
            self.state = INITIAL_STATE
        elif isinstance(state, ExpressionMode):
            full = state.full_expression[:-1]
            if not full:
                self.state = INITIAL_STATE
            else:
                self.state = replace(state, full_expression=full, expression=full,
                                     display=_trailing_number(full) or "0")
        elif isinstance(state, Entering):
            remaining = state.display[:-1]
            if remaining in ("", "-"):
                remaining = "0"
            self.state = replace(state, display=remaining)
        return self.state

    def clear(self):
        """Reset to the initial state and abandon any in-flight request"""
        self._generation += 1
        self.calculating = False
        self.state = INITIAL_STATE
        return self.state

    # ── Results ──────────────────────────────────────────────────────────
    def preview(self):
        """Result that equals would currently produce, or None"""
        state = self.state
        if state.is_error or state.just_calculated:
            return None
        if isinstance(state, ExpressionMode):
            return safe_evaluate(state.full_expression)
        if isinstance(state, Entering) and state.operator and state.operand1 != "":
            return compute_local(state.operator, state.operand1, state.display)
        return None

    def begin_equals(self):
        """Start a confirmed calculation.

        Local outcomes are applied immediately and None is returned. When the
        compute service has to be called, the calculator enters the
        calculating sub-state and a PendingCalculation is returned.
        """
        if not self._accepts_input():
            return None
        state = self.state
        if state.is_error:
            return None

        if isinstance(state, ExpressionMode):
            full = state.full_expression
            result = safe_evaluate(full)
            if result is None or result == config.ERROR_TEXT:
                self.state = ErrorState(expression=full + " =")
            else:
                self.state = JustCalculated(display=result, expression=f"{full} = {result}",
                                            operand1=result)
            return None

        if not isinstance(state, Entering) or not state.operator:
            return None
        x_value = parse_operand(state.operand1)
        y_value = parse_operand(state.display)
        if x_value is None or y_value is None:
            return None

        op = state.operator
        if op == "/" and y_value == 0:
            self.state = ErrorState(expression=f"{state.operand1} {pretty_symbol('/')} 0")
            return None

        local_result = None
        if op == "/":
            local_result = format_division(float(x_value) / float(y_value))

        self._generation += 1
        self.calculating = True
        return PendingCalculation(
            token=self._generation,
            operator=op,
            x=to_integer(state.operand1),
            y=to_integer(state.display),
            expression=f"{state.operand1} {pretty_symbol(op)} {state.display}",
            local_result=local_result,
        )

    def call_service(self, pending):
        """Run the compute service call for a pending calculation.

        Safe to call from a worker thread; it does not touch calculator state.
        """
        if self.service is None:
            raise RemoteUnavailable("No compute service configured")
        operation = {
            "+": self.service.add,
            "-": self.service.subtract,
            "*": self.service.multiply,
            "/": self.service.divide,
        }[pending.operator]
        return operation(pending.x, pending.y)

    def finish_equals(self, pending, response=None, error=None):
        """Apply the outcome of a pending calculation if it is still current"""
        if pending.token != self._generation:
            logger.info("Discarding stale result for %s", pending.expression)
            return self.state
        self.calculating = False

        if pending.operator == "/":
            if error is not None:
                logger.warning("Division history was not recorded: %s", error)
            result = pending.local_result
        elif error is not None:
            logger.error("Calculation %s failed: %s", pending.expression, error)
            self.state = ErrorState(expression=pending.expression)
            return self.state
        else:
            result = str(response["result"])

        self.state = JustCalculated(display=result, expression=f"{pending.expression} = {result}",
                                    operand1=result)
        return self.state

    def equals(self):
        """Confirm the current calculation, calling the service synchronously"""
        pending = self.begin_equals()
        if pending is None:
            return self.state
        try:
            response = self.call_service(pending)
        except Exception as e:
            return self.finish_equals(pending, error=e)
        return self.finish_equals(pending, response=response)

    # ── Dispatch ─────────────────────────────────────────────────────────
    def press(self, button):
        """Dispatch a button or key value to its transition"""
        if button in "0123456789" and len(button) == 1:
            return self.input_digit(button)
        if button == ".":
            return self.input_decimal()
        if button in OPERATOR_ALIASES:
            return self.set_operator(button)
        action = _BUTTON_ACTIONS.get(button)
        if action is None:
            logger.debug("Ignoring unknown button %r", button)
            return self.state
        return getattr(self, action)()

    def get_display(self):
        """Text for the main display: preview if there is one, else the state display"""
        shown = self.preview()
        return shown if shown is not None else self.state.display


_BUTTON_ACTIONS = {
    "=": "equals",
    "Enter": "equals",
    "C": "clear",
    "clear": "clear",
    "Escape": "clear",
    "DEL": "backspace",
    "backspace": "backspace",
    "BackSpace": "backspace",
    "±": "negate",
    "negate": "negate",
    "(": "open_paren",
    ")": "close_paren",
    "%": "percent",
    "percent": "percent",
    "^": "power",
    "power": "power",
    "xʸ": "power",
    "square": "square",
    "x²": "square",
    "sqrt": "sqrt",
    "√x": "sqrt",
    "reciprocal": "reciprocal",
    "1/x": "reciprocal",
}
