"""Logging configuration for slopcannon"""
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from slopcannon.constants import CONFIG_DIR_NAME

LOG_FILE_NAME = "slopcannon.log"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Prefixes dropped from logger names, in order
SHORT_NAME_PREFIXES = ("slopcannon.", "services.")


def get_log_file() -> Path:
    """Location of the debug log file."""
    return Path.home() / CONFIG_DIR_NAME / LOG_FILE_NAME


def _console_level(verbose: bool, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING


def _file_handler() -> logging.Handler:
    log_file = get_log_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _console_handler(level: int, debug: bool) -> logging.Handler:
    handler = RichHandler(
        console=Console(stderr=True),
        level=level,
        show_time=debug,
        show_path=debug,
        markup=False,
        rich_tracebacks=debug,
    )
    handler.setFormatter(logging.Formatter(fmt="[%(name)s] %(message)s", datefmt=DATE_FORMAT))
    return handler


def setup_logging(verbose: bool = False, debug: bool = False, tui_mode: bool = False) -> None:
    """
    Configure logging for the application.

    Messages go to stderr through rich. With ``debug``, or while the cleanup
    picker owns the terminal (``tui_mode``), everything is also written to
    ``~/.slopcannon/slopcannon.log``, replaced on each run. In ``tui_mode``
    nothing is written to stderr.

    Args:
        verbose: If True, show INFO level messages
        debug: If True, show DEBUG level messages and write a log file
        tui_mode: If True, log only to the file
    """
    level = _console_level(verbose, debug)
    to_file = tui_mode or debug

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if to_file else level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    if to_file:
        root_logger.addHandler(_file_handler())
    if not tui_mode:
        root_logger.addHandler(_console_handler(level, debug))


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, named without the package prefix."""
    for prefix in SHORT_NAME_PREFIXES:
        if name.startswith(prefix):
            name = name[len(prefix):]
    return logging.getLogger(name)
