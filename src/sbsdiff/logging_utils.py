"""Centralized logging utilities for sbsdiff entry points.

Every external tool call and every highlighted line logs a DEBUG record.
With ``--verbose`` alone those per-call records are held back so that the
debug output stays readable; ``--trace`` lets them through and adds
timestamps, logger names and the worker thread to each record.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

# Loggers that emit one record per subprocess or per diff line
PER_CALL_LOGGERS = ("sbsdiff.tools", "sbsdiff.renderers.terminal")


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure root logging handlers for the command line.

    Diagnostics always go to stderr so they never mix with the diff
    written to stdout.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Optional path to a log file for teeing log output.
    trace_mode : bool, default False
        When true, emit timestamps, logger and thread names, and the
        per-call records of :data:`PER_CALL_LOGGERS`.

    Returns
    -------
    logging.Logger
        The configured root logger instance.

    """
    resolved_level = log_level if isinstance(log_level, int) else getattr(logging, str(log_level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    for name in PER_CALL_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET if trace_mode else max(resolved_level, logging.INFO))

    if trace_mode:
        format_str = "[%(asctime)s] [%(levelname)s] [%(name)s] [%(threadName)s] %(message)s"
        date_format: Optional[str] = "%Y-%m-%d %H:%M:%S"
    else:
        format_str = "%(levelname)s: %(message)s"
        date_format = None
    formatter = logging.Formatter(format_str, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            root_logger.info("Logging to file: %s", log_file)
        except OSError as exc:  # pragma: no cover - handled at runtime
            root_logger.warning("Could not create log file %s: %s", log_file, exc)

    return root_logger
