"""
Tokenizer for NeonCalc
Splits a raw expression string into lexical tokens
"""
from collections import namedtuple

NUMBER = "NUMBER"
OPERATOR = "OPERATOR"
LPAREN = "LPAREN"
RPAREN = "RPAREN"
POWER = "POWER"
PERCENT = "PERCENT"
SQRT = "SQRT"

SQRT_SIGN = "√"

Token = namedtuple("Token", ["kind", "text"])

_SINGLE_CHAR = {
    "(": LPAREN,
    ")": RPAREN,
    "^": POWER,
    "%": PERCENT,
    "*": OPERATOR,
    "/": OPERATOR,
    "+": OPERATOR,
    "-": OPERATOR,
    SQRT_SIGN: SQRT,
}

_NUMBER_CHARS = "0123456789."


def tokenize(expr):
    """Convert an expression into a list of tokens.

    Numbers are maximal runs of digits and points and are not validated here,
    so "1.2.3" comes back as a single NUMBER token. Unknown characters are
    dropped. Never raises.
    """
    tokens = []
    i = 0
    while i < len(expr):
        ch = expr[i]
        if ch.isspace():
            i += 1
            continue
        if ch in _SINGLE_CHAR:
            tokens.append(Token(_SINGLE_CHAR[ch], ch))
            i += 1
            continue
        if ch in _NUMBER_CHARS:
            start = i
            while i < len(expr) and expr[i] in _NUMBER_CHARS:
                i += 1
            tokens.append(Token(NUMBER, expr[start:i]))
            continue
        i += 1
    return tokens
