"""Central configuration for graphcalc.

Solver and sampling constants can be overridden through an environment variable
prefixed with GRAPHCALC_, e.g. GRAPHCALC_NUM_INITIAL_GUESSES=20.
"""

import math
import os

VERSION = "1.0.0"

# ============================================================================
# GRID
# ============================================================================

# Fixed: render output is always 22 lines of 82 columns plus the caption
GRID_WIDTH = 80
GRID_HEIGHT = 20

# Screen cells per unit at zoom 1
CELLS_PER_UNIT = float(os.getenv("GRAPHCALC_CELLS_PER_UNIT", "5.0"))

BLANK = ' '
MARKER = '*'
AXIS_TICK = '+'
AXIS_H = '-'
AXIS_V = '|'

# ============================================================================
# SOLVER
# ============================================================================

MAX_ITER = int(os.getenv("GRAPHCALC_MAX_ITER", "100"))
EPSILON = float(os.getenv("GRAPHCALC_EPSILON", "1e-10"))
DERIVATIVE_STEP = float(os.getenv("GRAPHCALC_DERIVATIVE_STEP", "1e-7"))
DAMPING = float(os.getenv("GRAPHCALC_DAMPING", "0.5"))

PERIODIC_FUNCTIONS = ("sin", "cos", "tan")
PI = math.pi

# ============================================================================
# SAMPLING
# ============================================================================

NUM_INITIAL_GUESSES = int(os.getenv("GRAPHCALC_NUM_INITIAL_GUESSES", "40"))
POINTS_PER_COLUMN = int(os.getenv("GRAPHCALC_POINTS_PER_COLUMN", "10"))

# (substrings, (y_min, y_max)) checked in order, first hit wins
SEED_RANGES = [
    (("sin", "cos"), (-1.5, 1.5)),
    (("ln", "log"), (-10.0, 10.0)),
]
DEFAULT_SEED_RANGE = (-5.0, 5.0)

# ============================================================================
# INTERACTIVE LAYER
# ============================================================================

ZOOM_STEP = float(os.getenv("GRAPHCALC_ZOOM_STEP", "1.5"))
LOG_LEVEL = os.getenv("GRAPHCALC_LOG_LEVEL", "WARNING")

EXAMPLE_EQUATIONS = [
    "y = x^2",
    "x*x + y*y = 9",
    "y = sin(x)",
    "y = cos(x) * 0.5",
    "y = ln(x)",
    "y = exp(x) - 3",
    "x*y = 1",
    "y*y = x^3 - x",
    "y = 1/x",
    "y^3 = x",
]
