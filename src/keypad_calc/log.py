"""
Logging setup for Keypad Calc.

Log lines go to stderr so command output on stdout stays clean.
Modules obtain their logger with ``structlog.get_logger()`` and log
key/value events; this module only decides the level and rendering.
"""

import logging
import sys

import structlog


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """Configure structlog with a level filter and console or JSON output."""
    level_no = logging.getLevelName(level.upper())
    if not isinstance(level_no, int):
        raise ValueError(f"Unknown log level: {level}")

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_no),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


def _stderr_logger(*args) -> structlog.PrintLogger:
    """Print to whatever ``sys.stderr`` is at log time, never stdout."""
    return structlog.PrintLogger(sys.stderr)
