"""Damped Newton solver for y in LHS(x, y) = RHS(x, y)."""

import math

from .config import DAMPING, DERIVATIVE_STEP, EPSILON, MAX_ITER, PERIODIC_FUNCTIONS, PI
from .evaluator import compile_tokens
from .lexer import tokenize


def split_equation(equation):
    """Split at the first '='; a bare expression is set equal to 0"""
    left, sep, right = equation.partition('=')
    if not sep:
        return equation, "0"
    return left, right


def is_periodic(equation):
    """True when the text mentions sin, cos or tan anywhere"""
    return any(name in equation for name in PERIODIC_FUNCTIONS)


def wrap_periodic(y):
    """fmod(y + pi, 2pi) - pi, with C's nan for an infinite y"""
    if math.isinf(y):
        return math.nan
    return math.fmod(y + PI, 2 * PI) - PI


def compile_equation(equation):
    """
    Lex and compile both sides of an equation.

    Returns (residual, periodic) where residual(x, y) is LHS - RHS.
    """
    left_text, right_text = split_equation(equation)
    left = compile_tokens(tokenize(left_text))
    right = compile_tokens(tokenize(right_text))

    def residual(x, y):
        return left(x, y) - right(x, y)

    return residual, is_periodic(equation)


def newton(residual, x, initial_y, periodic=False):
    """Iterate from initial_y; nan if MAX_ITER steps pass without settling"""
    y = float(initial_y)
    iterations = 0

    while True:
        prev_y = y

        f = residual(x, y)
        df = (residual(x, y + DERIVATIVE_STEP) - f) / DERIVATIVE_STEP

        # Keep f/df finite near flat spots
        if abs(df) < EPSILON:
            df = -EPSILON if df < 0 else EPSILON

        y -= DAMPING * (f / df)

        if periodic:
            y = wrap_periodic(y)

        iterations += 1
        if not (abs(y - prev_y) > EPSILON and iterations < MAX_ITER):
            break

    return y if iterations < MAX_ITER else math.nan


def solve(equation, x, initial_y):
    """Solve the equation for y at x starting from initial_y; nan on failure"""
    residual, periodic = compile_equation(equation)
    return newton(residual, float(x), initial_y, periodic)
