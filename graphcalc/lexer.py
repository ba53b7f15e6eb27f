"""Expression tokenizer. Unknown characters are dropped, never reported."""

import re
import string
from collections import namedtuple

# Token kinds
NUMBER = "number"
VARIABLE = "variable"
OPERATOR = "operator"
FUNCTION = "function"
LPAREN = "lparen"
RPAREN = "rparen"
EQUALS = "equals"

Token = namedtuple('Token', ['kind', 'text', 'value'], defaults=(0.0,))

FUNCTIONS = ('sin', 'cos', 'tan', 'log', 'ln', 'exp')
OPERATORS = '+-*/^'

NUMBER_CHARS = set(string.digits + '.')
LETTERS = set(string.ascii_letters)

SINGLE_CHAR_KINDS = {
    '=': EQUALS,
    '(': LPAREN,
    ')': RPAREN,
}

# Longest decimal prefix of a digit/dot run, the way atof reads it
_DECIMAL_PREFIX = re.compile(r'\d*(?:\.\d*)?')


def parse_number(text):
    """Read a digit/dot run leniently: '1.2.3' -> 1.2, '.' -> 0.0"""
    prefix = _DECIMAL_PREFIX.match(text).group(0)
    if prefix in ('', '.'):
        return 0.0
    return float(prefix)


def _take_run(expr, start, allowed):
    end = start
    while end < len(expr) and expr[end] in allowed:
        end += 1
    return expr[start:end], end


def tokenize(expr):
    """Turn an expression string into a tuple of Tokens"""
    tokens = []
    i = 0

    while i < len(expr):
        char = expr[i]

        if char.isspace():
            i += 1
        elif char in NUMBER_CHARS:
            text, i = _take_run(expr, i, NUMBER_CHARS)
            tokens.append(Token(NUMBER, text, parse_number(text)))
        elif char in LETTERS:
            text, i = _take_run(expr, i, LETTERS)
            kind = FUNCTION if text in FUNCTIONS else VARIABLE
            tokens.append(Token(kind, text))
        elif char in SINGLE_CHAR_KINDS:
            tokens.append(Token(SINGLE_CHAR_KINDS[char], char))
            i += 1
        elif char in OPERATORS:
            tokens.append(Token(OPERATOR, char))
            i += 1
        else:
            i += 1

    return tuple(tokens)
