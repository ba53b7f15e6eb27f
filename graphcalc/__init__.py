"""graphcalc: implicit equation solver and text-mode plotter."""

from .config import VERSION as __version__
from .evaluator import evaluate
from .lexer import Token, tokenize
from .renderer import ViewSettings, render, render_rows
from .solver import solve

__all__ = [
    "Token",
    "ViewSettings",
    "evaluate",
    "render",
    "render_rows",
    "solve",
    "tokenize",
]
