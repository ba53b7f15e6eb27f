import argparse
import curses
import logging
import sys
from functools import lru_cache

import sympy as sp
from sympy.parsing.sympy_parser import convert_xor, parse_expr, standard_transformations

from .config import EXAMPLE_EQUATIONS, GRID_WIDTH, LOG_LEVEL, VERSION, ZOOM_STEP
from .lexer import NUMBER_CHARS, LETTERS, OPERATORS, SINGLE_CHAR_KINDS, VARIABLE, tokenize
from .logging_config import setup_logging
from .renderer import ViewSettings, caption, render, render_rows
from .solver import split_equation

logger = logging.getLogger(__name__)

# ============================================================================
# GLOBAL STATE
# ============================================================================

equation = EXAMPLE_EQUATIONS[0]
view = ViewSettings()

edit_mode = False
edit_buffer = ""
cursor_pos = 0
example_index = 0
last_drawn = None

status_msg = "Press N to enter an equation | E for examples"
warning_msg = ""

INSTRUCTIONS = [
    "Supports +, -, *, /, ^, sin, cos, tan, log, ln, exp.",
    "Does not support asin, acos, atan, or advanced functions like abs or floor.",
    "Avoid undefined operations like division by zero.",
]

# Color Pairs
COLOR_HEADER = 1
COLOR_EXPR = 2
COLOR_PLOT = 3
COLOR_ERROR = 4
COLOR_MODE = 5

KEY_ESC = 27

# ============================================================================
# VIEW ADJUSTMENTS
# ============================================================================

def zoom_in(settings):
    settings.zoom *= ZOOM_STEP


def zoom_out(settings):
    settings.zoom /= ZOOM_STEP


def pan(settings, dx, dy):
    """Move by whole steps of 1/zoom along each axis"""
    settings.x_offset += dx / settings.zoom
    settings.y_offset += dy / settings.zoom


def reset_view(settings):
    settings.zoom = 1.0
    settings.x_offset = 0.0
    settings.y_offset = 0.0

# ============================================================================
# EQUATION CHECKING
# ============================================================================

TRANSFORMATIONS = standard_transformations + (convert_xor,)


def get_math_context():
    """Names sympy should read the way the plotter does"""
    return {
        'sin': sp.sin, 'cos': sp.cos, 'tan': sp.tan,
        'log': lambda arg: sp.log(arg, 10), 'ln': sp.log, 'exp': sp.exp,
        'x': sp.Symbol('x'), 'y': sp.Symbol('y'),
    }


def check_equation(text):
    """
    Advisory check of an equation; returns a warning or "".

    The plotter accepts anything, so this never blocks a plot. It only
    points out input that will be silently dropped or read as 0.
    """
    text = text.strip()
    if not text:
        return "Empty equation"

    known = NUMBER_CHARS | LETTERS | set(OPERATORS) | set(SINGLE_CHAR_KINDS)
    dropped = sorted({c for c in text if c not in known and not c.isspace()})
    if dropped:
        return "Ignored characters: " + " ".join(dropped)

    unknown = sorted({t.text for t in tokenize(text)
                      if t.kind == VARIABLE and t.text not in ('x', 'y')})
    if unknown:
        return "Unknown names read as 0: " + ", ".join(unknown)

    if text.count('=') > 1:
        return "Only the first '=' splits the equation"

    for side in split_equation(text):
        try:
            parse_expr(side.strip() or "0", local_dict=get_math_context(),
                       transformations=TRANSFORMATIONS)
        except Exception as e:
            return f"Could not parse '{side.strip()}': {e}"

    return ""


def set_equation(text):
    """Switch to a new equation; the view goes back to its defaults"""
    global equation, warning_msg, status_msg

    equation = text.strip()
    reset_view(view)
    warning_msg = check_equation(equation)
    if warning_msg:
        logger.warning("Equation %r: %s", equation, warning_msg)
    status_msg = "Plotting " + equation
    logger.info("Equation set to %r", equation)

# ============================================================================
# DRAWING FUNCTIONS
# ============================================================================

@lru_cache(maxsize=32)
def plot_rows(text, zoom, x_offset, y_offset):
    """Rows for a given plot; keystrokes that don't move the view reuse them"""
    return render_rows(text, ViewSettings(zoom, x_offset, y_offset))


def draw_header(stdscr):
    """Draw title and instructions"""
    height, width = stdscr.getmaxyx()

    try:
        title = f"=== GRAPHING CALC {VERSION} ==="
        stdscr.addstr(0, max(0, (width - len(title)) // 2), title,
                      curses.color_pair(COLOR_HEADER) | curses.A_BOLD)
        for i, line in enumerate(INSTRUCTIONS):
            stdscr.addstr(1 + i, 2, ("- " + line)[:width - 4], curses.color_pair(COLOR_HEADER))
    except curses.error:
        pass

    return 1 + len(INSTRUCTIONS)


def draw_equation(stdscr, start_row):
    """Draw the equation line, with a cursor while editing"""
    height, width = stdscr.getmaxyx()

    try:
        if edit_mode:
            display = edit_buffer[:cursor_pos] + "|" + edit_buffer[cursor_pos:]
            line = f"EDIT > {display}"
            attr = curses.color_pair(COLOR_MODE) | curses.A_BOLD
        else:
            line = f"EQUATION: {equation}"
            attr = curses.color_pair(COLOR_EXPR) | curses.A_BOLD
        if len(line) > width - 4:
            line = line[:width - 7] + "..."
        stdscr.addstr(start_row, 2, line, attr)
    except curses.error:
        pass

    return start_row + 1


def draw_plot(stdscr, start_row):
    """Draw the framed plot and its caption"""
    height, width = stdscr.getmaxyx()
    rows = plot_rows(equation, view.zoom, view.x_offset, view.y_offset)
    border = '+' + '-' * GRID_WIDTH + '+'
    lines = [border] + ['|' + row + '|' for row in rows] + [border, caption(view)]

    row = start_row
    try:
        for line in lines:
            if row >= height - 1:
                break
            attr = curses.color_pair(COLOR_PLOT) if line.startswith('|') else curses.color_pair(COLOR_HEADER)
            stdscr.addstr(row, 2, line[:width - 4], attr)
            row += 1
    except curses.error:
        pass

    return row


def draw_footer(stdscr):
    """Draw warning, else status and key hints"""
    height, width = stdscr.getmaxyx()

    try:
        if warning_msg:
            stdscr.addstr(height - 1, 2, f"! {warning_msg}"[:width - 4],
                          curses.color_pair(COLOR_ERROR) | curses.A_BOLD)
        elif edit_mode:
            hint = "Type | <- -> | Enter=plot | Esc=cancel"
            stdscr.addstr(height - 1, 2, hint[:width - 4], curses.color_pair(COLOR_HEADER))
        else:
            hint = f"{status_msg} | +/- zoom | arrows/hjkl pan | N edit | E examples | 0 reset | Q quit"
            stdscr.addstr(height - 1, 2, hint[:width - 4], curses.color_pair(COLOR_HEADER))
    except curses.error:
        pass


def draw_busy(stdscr):
    """Tell the user a render is running before it blocks"""
    height, width = stdscr.getmaxyx()
    try:
        stdscr.move(height - 1, 0)
        stdscr.clrtoeol()
        stdscr.addstr(height - 1, 2, "Rendering..."[:width - 4], curses.color_pair(COLOR_MODE))
        stdscr.refresh()
    except curses.error:
        pass


def draw_screen(stdscr):
    """Main draw function"""
    global last_drawn

    current = (equation, view.zoom, view.x_offset, view.y_offset)
    if current != last_drawn:
        draw_busy(stdscr)

    stdscr.erase()
    row = draw_header(stdscr)
    row = draw_equation(stdscr, row)
    draw_plot(stdscr, row)
    draw_footer(stdscr)
    stdscr.refresh()

    last_drawn = current

# ============================================================================
# INPUT HANDLING
# ============================================================================

def handle_zoom_pan(key):
    """Handle zoom and pan"""
    global status_msg

    if key in (ord('+'), ord('=')):
        zoom_in(view)
        status_msg = "Zoomed in"
    elif key in (ord('-'), ord('_')):
        zoom_out(view)
        status_msg = "Zoomed out"
    elif key in (curses.KEY_LEFT, ord('h')):
        pan(view, -1, 0)
        status_msg = "Moved left"
    elif key in (curses.KEY_RIGHT, ord('l')):
        pan(view, 1, 0)
        status_msg = "Moved right"
    elif key in (curses.KEY_UP, ord('k')):
        pan(view, 0, 1)
        status_msg = "Moved up"
    elif key in (curses.KEY_DOWN, ord('j')):
        pan(view, 0, -1)
        status_msg = "Moved down"
    elif key == ord('0'):
        reset_view(view)
        status_msg = "View reset"
    else:
        return

    logger.info("View now zoom=%.4f x_offset=%.4f y_offset=%.4f",
                view.zoom, view.x_offset, view.y_offset)


def handle_editing(key):
    """Handle text editing"""
    global edit_buffer, cursor_pos, edit_mode, status_msg

    if key in (curses.KEY_ENTER, 10, 13):
        edit_mode = False
        set_equation(edit_buffer)
    elif key == KEY_ESC:
        edit_mode = False
        status_msg = "Edit cancelled"
    elif key == curses.KEY_LEFT:
        cursor_pos = max(0, cursor_pos - 1)
    elif key == curses.KEY_RIGHT:
        cursor_pos = min(len(edit_buffer), cursor_pos + 1)
    elif key in (curses.KEY_BACKSPACE, 127, 8):
        if cursor_pos > 0:
            edit_buffer = edit_buffer[:cursor_pos - 1] + edit_buffer[cursor_pos:]
            cursor_pos -= 1
    elif key == curses.KEY_DC:
        if cursor_pos < len(edit_buffer):
            edit_buffer = edit_buffer[:cursor_pos] + edit_buffer[cursor_pos + 1:]
    elif 32 <= key <= 126:
        edit_buffer = edit_buffer[:cursor_pos] + chr(key) + edit_buffer[cursor_pos:]
        cursor_pos += 1


def handle_special_commands(key):
    """Handle commands outside edit mode; returns False to quit"""
    global edit_mode, edit_buffer, cursor_pos, example_index, status_msg, warning_msg

    if key in (ord('q'), ord('Q'), KEY_ESC):
        return False

    if key in (ord('n'), ord('N'), ord(' ')):
        edit_mode = True
        edit_buffer = equation
        cursor_pos = len(edit_buffer)
        warning_msg = ""
    elif key in (ord('e'), ord('E')):
        example_index = (example_index + 1) % len(EXAMPLE_EQUATIONS)
        set_equation(EXAMPLE_EQUATIONS[example_index])
        status_msg = f"Example {example_index + 1}/{len(EXAMPLE_EQUATIONS)}"
    else:
        handle_zoom_pan(key)

    return True

# ============================================================================
# MAIN LOOP
# ============================================================================

def init_colors():
    """Initialize color pairs"""
    curses.start_color()
    curses.use_default_colors()

    try:
        curses.curs_set(0)
    except curses.error:
        pass

    curses.init_pair(COLOR_HEADER, curses.COLOR_CYAN, -1)
    curses.init_pair(COLOR_EXPR, curses.COLOR_WHITE, -1)
    curses.init_pair(COLOR_PLOT, curses.COLOR_MAGENTA, -1)
    curses.init_pair(COLOR_ERROR, curses.COLOR_RED, -1)
    curses.init_pair(COLOR_MODE, curses.COLOR_GREEN, -1)


def main(stdscr):
    """Main application loop"""
    global warning_msg

    stdscr.keypad(True)
    curses.cbreak()
    curses.set_escdelay(25)
    stdscr.nodelay(False)

    init_colors()
    stdscr.clear()
    warning_msg = check_equation(equation)

    while True:
        draw_screen(stdscr)
        key = stdscr.getch()

        if edit_mode:
            handle_editing(key)
        elif not handle_special_commands(key):
            break

# ============================================================================
# ENTRY POINTS
# ============================================================================

def positive_float(text):
    """argparse type for the zoom factor"""
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}")
    if not value > 0:
        raise argparse.ArgumentTypeError(f"zoom must be > 0, got {text}")
    return value


def build_parser():
    parser = argparse.ArgumentParser(
        prog="graphcalc",
        description="Plot an equation in x and y as text. Without an equation, start the interactive viewer.",
    )
    parser.add_argument("equation", nargs="?", help="equation such as 'x*x + y*y = 9'")
    parser.add_argument("--zoom", type=positive_float, default=1.0, help="zoom factor (> 0)")
    parser.add_argument("--x-offset", type=float, default=0.0, help="horizontal pan in plot units")
    parser.add_argument("--y-offset", type=float, default=0.0, help="vertical pan in plot units")
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument("--log-level", default=LOG_LEVEL, help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser


def main_entry(argv=None):
    """Parse arguments, then print one plot or run the curses viewer"""
    args = build_parser().parse_args(argv)

    if args.equation is not None:
        setup_logging(args.log_level, args.log_file)
        settings = ViewSettings(args.zoom, args.x_offset, args.y_offset)
        logger.info("Batch render of %r", args.equation)
        warning = check_equation(args.equation)
        if warning:
            logger.warning("Equation %r: %s", args.equation, warning)
        print(render(args.equation, settings))
        return 0

    # Log lines on the terminal would tear the curses screen
    setup_logging(args.log_level, args.log_file, console=False)
    view.zoom, view.x_offset, view.y_offset = args.zoom, args.x_offset, args.y_offset
    logger.info("Starting interactive viewer")
    curses.wrapper(main)
    return 0


def run():
    """Entry point"""
    try:
        code = main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        code = 0
    except Exception as e:
        print(f"Error: {e}")
        import traceback
        traceback.print_exc()
        code = 1
    sys.exit(code)
