"""Debug logging configuration for the command line and for test sessions."""

from __future__ import annotations

import logging
import sys
from pathlib import Path


def setup_logger(
    debug_file: Path | None,
    verbose: bool = False,
    logger_name: str = "verdict",
    level: int | str = logging.DEBUG,
) -> logging.Logger:
    """
    Configure and return a logger for debug output.

    Writes to debug_file when given, and to stderr if verbose=True.

    Args:
        debug_file: Path to debug log file, or None for no file output
        verbose: If True, also log to stderr
        logger_name: Name of the logger instance; ``verdict`` covers every library module
        level: Minimum level recorded by the handlers

    Returns:
        Configured logger instance.

    Raises:
        RuntimeError: a logger with this name already has handlers attached.
    """
    logger = logging.getLogger(logger_name)

    if logger.handlers:
        raise RuntimeError(
            f"Logger '{logger_name}' already exists with handlers attached; "
            "use a unique logger name"
        )

    logger.disabled = False
    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(name)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    if debug_file is not None:
        debug_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(debug_file, mode="a")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if verbose:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(level)
        stderr_handler.setFormatter(formatter)
        logger.addHandler(stderr_handler)

    return logger
