"""
Escala - Logging Infrastructure
===============================
Console + rotating file logging for the `escala` logger tree, and a
TRACE-level decorator for calendar and board entry points.

Levels:
    TRACE (5): Function entry/exit with arguments and timing
    DEBUG (10): Store queries, state transitions
    INFO (20): Sign-in, roster changes, assignments
    WARNING (30): Failed writes that trigger a re-fetch
    ERROR (40): Read failures, schema mismatches
"""
import functools
import logging
import sys
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Callable, Optional


TRACE = 5
logging.addLevelName(TRACE, "TRACE")

ROOT_LOGGER_NAME = "escala"

CONSOLE_FORMAT = "[%(asctime)s] %(levelname)-7s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"

# Libraries that log chatty DEBUG output through the root logger
NOISY_LOGGERS = ("fontTools", "PIL", "urllib3", "watchdog")


class ColoredFormatter(logging.Formatter):
    """Console formatter; colours the line by level when stdout is a terminal."""

    COLORS = {
        TRACE: "\033[90m",
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record):
        message = super().format(record)
        color = self.COLORS.get(record.levelno)
        if not color or not sys.stdout.isatty():
            return message
        return f"{color}{message}{self.RESET}"


def _parse_level(name: str) -> int:
    name = str(name).upper()
    if name == "TRACE":
        return TRACE
    return getattr(logging, name, logging.INFO)


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    return handler


def _file_handler(log_file: str, level: int, max_bytes: int, backup_count: int) -> logging.Handler:
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = "logs/escala.log",
    console_level: Optional[str] = None,
    max_bytes: int = 2 * 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """
    Configure the `escala` logger.

    Safe to call on every Streamlit rerun: existing handlers are replaced,
    never stacked.

    Args:
        level: Minimum level written to the log file
        log_file: Path to the log file (None = console only)
        console_level: Console level (defaults to level)
        max_bytes: Size at which the file is rotated
        backup_count: Rotated files kept

    Returns:
        The `escala` logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(TRACE)  # handlers filter
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    file_level = _parse_level(level)
    cons_level = _parse_level(console_level or level)

    logger.addHandler(_console_handler(cons_level))
    if log_file:
        logger.addHandler(_file_handler(log_file, file_level, max_bytes, backup_count))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.debug(
        f"Logging ready: console={logging.getLevelName(cons_level)}, "
        f"file={log_file or 'disabled'}"
    )
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, e.g. get_logger("escala.store.sqlite")."""
    return logging.getLogger(name)


def _short(value, limit: int) -> str:
    text = repr(value)
    return text if len(text) <= limit else text[:limit - 3] + "..."


def _summarize(result) -> str:
    if isinstance(result, (list, tuple)):
        return f"{len(result)} items"
    return _short(result, 80)


def log_function_call(func: Callable) -> Callable:
    """
    Log entry, exit and elapsed time of a function at TRACE level.
    Exceptions are logged at ERROR and re-raised.

    Usage:
        @log_function_call
        def generate_shift_days(year, month):
            ...
    """
    logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.trace.{func.__module__}")
    name = func.__name__

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if logger.isEnabledFor(TRACE):
            shown = [_short(a, 50) for a in args[:3]]
            shown += [f"{k}={_short(v, 30)}" for k, v in list(kwargs.items())[:3]]
            logger.log(TRACE, f"→ {name}({', '.join(shown)})")

        started = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"✖ {name} raised {type(e).__name__}: {e}")
            raise

        if logger.isEnabledFor(TRACE):
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.log(TRACE, f"← {name} -> {_summarize(result)} ({elapsed_ms:.1f} ms)")
        return result

    return wrapper


def init_logging(config) -> logging.Logger:
    """Configure logging from an AppConfig (log_level, log_file)."""
    return setup_logging(level=config.log_level, log_file=config.log_file)
