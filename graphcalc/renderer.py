"""Character-grid renderer for implicit equations."""

import logging
import math
from dataclasses import dataclass

from .config import (
    AXIS_H,
    AXIS_TICK,
    AXIS_V,
    BLANK,
    CELLS_PER_UNIT,
    DEFAULT_SEED_RANGE,
    GRID_HEIGHT,
    GRID_WIDTH,
    MARKER,
    NUM_INITIAL_GUESSES,
    POINTS_PER_COLUMN,
    SEED_RANGES,
)
from .solver import compile_equation, newton

logger = logging.getLogger(__name__)


@dataclass
class ViewSettings:
    """Zoom and pan state; zoom must stay > 0"""
    zoom: float = 1.0
    x_offset: float = 0.0
    y_offset: float = 0.0


@dataclass
class SeedTrack:
    """Last in-bounds sample for one initial guess"""
    last_y_value: float = 0.0
    last_plot_row: int = 0
    has_previous: bool = False

# ============================================================================
# GEOMETRY
# ============================================================================

def axis_position(view):
    """(center_row, center_col) of the axes on screen"""
    center_col = int(GRID_WIDTH / 2 - view.x_offset * CELLS_PER_UNIT * view.zoom)
    center_row = int(GRID_HEIGHT / 2 + view.y_offset * CELLS_PER_UNIT * view.zoom)
    return center_row, center_col


def column_to_x(column, sub_column, view):
    """Inverse projection of a screen column plus sub-column offset"""
    return ((column - GRID_WIDTH // 2 + sub_column / POINTS_PER_COLUMN)
            / (CELLS_PER_UNIT * view.zoom) + view.x_offset)


def y_to_row(y, view):
    """Screen row for y, or -1 when the projection overflows"""
    row = (GRID_HEIGHT / 2 - y * CELLS_PER_UNIT * view.zoom
           + view.y_offset * CELLS_PER_UNIT * view.zoom)
    if not math.isfinite(row):
        return -1
    return int(row)


def seed_range(equation):
    """Pick the band of initial guesses from the functions named in the text"""
    for names, bounds in SEED_RANGES:
        if any(name in equation for name in names):
            return bounds
    return DEFAULT_SEED_RANGE


def initial_guesses(equation):
    y_min, y_max = seed_range(equation)
    if NUM_INITIAL_GUESSES == 1:
        return [y_min]
    return [y_min + (y_max - y_min) * k / (NUM_INITIAL_GUESSES - 1)
            for k in range(NUM_INITIAL_GUESSES)]

# ============================================================================
# DRAWING
# ============================================================================

def blank_grid():
    return [[BLANK for _ in range(GRID_WIDTH)] for _ in range(GRID_HEIGHT)]


def draw_axes(grid, view):
    """Dashed axes; the vertical one wins where they cross"""
    center_row, center_col = axis_position(view)

    for i in range(GRID_HEIGHT):
        for j in range(GRID_WIDTH):
            if i == center_row:
                grid[i][j] = AXIS_TICK if j % 2 == 0 else AXIS_H
            if j == center_col:
                grid[i][j] = AXIS_TICK if i % 2 == 0 else AXIS_V


def draw_line(grid, x_start, y_start, x_end, y_end):
    """Integer Bresenham line, left to right, filling blank cells only"""
    dx = x_end - x_start
    dy = abs(y_end - y_start)
    step = 1 if y_start < y_end else -1
    err = dx // 2
    y = y_start

    for x in range(x_start, x_end + 1):
        if 0 <= y < GRID_HEIGHT and 0 <= x < GRID_WIDTH and grid[y][x] == BLANK:
            grid[y][x] = MARKER
        err -= dy
        if err < 0:
            y += step
            err += dx


def frame(rows, view):
    """Border the rows and append the caption line"""
    border = '+' + '-' * GRID_WIDTH + '+'
    lines = [border]
    lines.extend('|' + row + '|' for row in rows)
    lines.append(border)
    lines.append('')
    lines.append(caption(view))
    return '\n'.join(lines)


def caption(view):
    return "Plot (Zoom: %.2f, Offset: %.2f, %.2f)" % (
        view.zoom, view.x_offset, view.y_offset)

# ============================================================================
# RENDERING
# ============================================================================

def render_rows(equation, view):
    """Plot the equation and return GRID_HEIGHT strings of GRID_WIDTH chars"""
    grid = blank_grid()
    draw_axes(grid, view)

    residual, periodic = compile_equation(equation)
    guesses = initial_guesses(equation)
    tracks = [SeedTrack() for _ in guesses]

    plotted = 0
    failed = 0

    for j in range(GRID_WIDTH):
        for sub_j in range(POINTS_PER_COLUMN):
            x_val = column_to_x(j, sub_j, view)

            for track, initial_y in zip(tracks, guesses):
                y_val = newton(residual, x_val, initial_y, periodic)

                if not math.isfinite(y_val):
                    failed += 1
                    continue

                plot_y = y_to_row(y_val, view)
                if not 0 <= plot_y < GRID_HEIGHT:
                    track.has_previous = False
                    continue

                grid[plot_y][j] = MARKER
                plotted += 1

                if track.has_previous and j > 0:
                    draw_line(grid, j - 1, track.last_plot_row, j, plot_y)

                track.last_y_value = y_val
                track.last_plot_row = plot_y
                track.has_previous = True

    logger.debug("Rendered %r at %s: %d points plotted, %d solves failed",
                 equation, view, plotted, failed)

    return [''.join(row) for row in grid]


def render(equation, view):
    """Render the equation as a bordered text block with a caption"""
    return frame(render_rows(equation, view), view)
