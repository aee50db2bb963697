"""Logging setup for tightloop.

Progress messages ("Running benchmark for: ...", per-sample timings) go
through the ``tightloop`` logger to stderr so that rendered reports on
stdout stay machine-readable.  An optional log file always receives the
full DEBUG stream, including every raw sample.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_LOGGER_NAME = "tightloop"
_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
_CONSOLE_FORMAT = "%(levelname)-8s %(message)s"


def console_level(*, verbose: bool = False, quiet: bool = False) -> int:
    """Map the CLI verbosity flags to a console log level.

    *verbose* wins over *quiet* when both are given.
    """
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def setup_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | str | None = None,
) -> logging.Logger:
    """Configure and return the ``tightloop`` logger.

    Calling this again replaces the handlers installed by a previous call,
    so repeated CLI invocations in one process do not duplicate output.

    Args:
        verbose: Show per-sample DEBUG messages on the console.
        quiet: Only show warnings and errors on the console.
        log_file: Also write every message, at DEBUG, to this path.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level(verbose=verbose, quiet=quiet))
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(Path(log_file), encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger
