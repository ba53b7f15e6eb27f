"""
Logging Configuration
Sets up the 'graphcalc' logger namespace.
"""
import logging
import sys


def setup_logging(level=logging.WARNING, log_file=None, console=True):
    """
    Configure the 'graphcalc' logger.

    Args:
        level: Logging level, as an int or a name such as "DEBUG".
        log_file: Optional path to write logs to.
        console: Attach a stderr handler. The curses UI turns this off
            so log lines do not land on the screen.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger("graphcalc")
    logger.setLevel(level)

    # Re-running setup (tests, new CLI invocation) must not duplicate output
    if logger.hasHandlers():
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    logger.debug("Logging initialized.")
    return logger
