"""
Token-sequence evaluator.

Evaluation splits a token slice at its lowest-precedence operator outside
parentheses and recurses on both halves; no parse tree is built. Where the
split lands depends only on the tokens, so each distinct slice is compiled
once into nested closures and the closures are called for every (x, y).

Nothing here raises: malformed slices evaluate to 0, and math domain or
range errors come back as nan / inf the way C's libm reports them.
"""

import math
from functools import lru_cache

from .lexer import FUNCTION, LPAREN, NUMBER, OPERATOR, RPAREN, VARIABLE

PRECEDENCE = {'^': 3, '*': 2, '/': 2, '+': 1, '-': 1}

# ============================================================================
# MATH HELPERS
# ============================================================================

def _is_odd_integer(value):
    return value.is_integer() and value % 2 == 1


def _power(base, exponent):
    """pow() with C results instead of exceptions"""
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        # 0 to a negative power, or a negative base with a fractional exponent
        if base == 0:
            if math.copysign(1.0, base) < 0 and _is_odd_integer(exponent):
                return -math.inf
            return math.inf
        return math.nan


def _log10(arg):
    if arg == 0:
        return -math.inf
    if arg < 0:
        return math.nan
    return math.log10(arg)


def _ln(arg):
    if arg == 0:
        return -math.inf
    if arg < 0:
        return math.nan
    return math.log(arg)


FUNCTION_TABLE = {
    'sin': math.sin,
    'cos': math.cos,
    'tan': math.tan,
    'log': _log10,
    'ln': _ln,
    'exp': math.exp,
}


def apply_function(name, arg):
    """Apply a named function; sin(inf) is nan, exp(1000) is inf"""
    try:
        return FUNCTION_TABLE[name](arg)
    except ValueError:
        return math.nan
    except OverflowError:
        return math.inf


def apply_operator(symbol, left, right):
    """Combine two operand values"""
    if symbol == '+':
        return left + right
    if symbol == '-':
        return left - right
    if symbol == '*':
        return left * right
    if symbol == '/':
        return left / right if right != 0 else math.inf
    if symbol == '^':
        return _power(left, right)
    return 0.0

# ============================================================================
# SPLITTING
# ============================================================================

def find_split(tokens):
    """
    Index of the operator to split on, or None.

    Scans right to left at parenthesis depth 0 and keeps the first of the
    weakest operators it meets, i.e. the rightmost one. Splitting there
    makes every operator left-associative: 8/4/2 is (8/4)/2.
    """
    split = None
    lowest = None
    depth = 0

    for i in range(len(tokens) - 1, -1, -1):
        token = tokens[i]
        if token.kind == RPAREN:
            depth += 1
        elif token.kind == LPAREN:
            depth -= 1
        elif depth == 0 and token.kind == OPERATOR:
            prec = PRECEDENCE.get(token.text, 0)
            if lowest is None or prec < lowest:
                lowest = prec
                split = i

    return split

# ============================================================================
# COMPILATION
# ============================================================================

def _zero(x, y):
    return 0.0


def _compile_atom(token):
    if token.kind == NUMBER:
        value = token.value
        return lambda x, y: value
    if token.kind == VARIABLE:
        if token.text == 'x':
            return lambda x, y: x
        if token.text == 'y':
            return lambda x, y: y
    return _zero


def _compile_call(name, argument):
    def call(x, y):
        return apply_function(name, argument(x, y))
    return call


def _compile_binary(symbol, left, right):
    def binary(x, y):
        return apply_operator(symbol, left(x, y), right(x, y))
    return binary


@lru_cache(maxsize=4096)
def compile_tokens(tokens):
    """Compile a tuple of tokens into a callable f(x, y) -> float"""
    count = len(tokens)
    if count == 0:
        return _zero
    if count == 1:
        return _compile_atom(tokens[0])

    split = find_split(tokens)

    if split is None:
        first = tokens[0]
        if first.kind == FUNCTION:
            # Argument assumed to sit between the '(' after the name and the last token
            return _compile_call(first.text, compile_tokens(tokens[2:count - 1]))
        if first.kind == LPAREN and tokens[-1].kind == RPAREN:
            return compile_tokens(tokens[1:-1])
        return _zero

    left = compile_tokens(tokens[:split])
    right = compile_tokens(tokens[split + 1:])
    return _compile_binary(tokens[split].text, left, right)


def evaluate(tokens, x, y):
    """Evaluate a token sequence with x and y bound"""
    return compile_tokens(tuple(tokens))(float(x), float(y))
