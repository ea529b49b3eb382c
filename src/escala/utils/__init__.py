"""Utilities package for Escala."""
from .logging_setup import (
    TRACE,
    get_logger,
    init_logging,
    log_function_call,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "log_function_call",
    "init_logging",
    "TRACE",
]
