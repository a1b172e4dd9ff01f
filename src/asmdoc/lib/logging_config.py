"""Logging configuration for asmdoc.

All modules obtain their logger through ``get_logger(__name__)`` so that a
single call to ``setup_logging`` from the CLI controls the verbosity of the
whole package.
"""

import logging
import sys

ROOT_LOGGER_NAME = "asmdoc"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure the package logger.

    Verbose wins over quiet when both are given.

    Args:
        verbose: Emit DEBUG records
        quiet: Only emit WARNING and above
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)

    # Replace handlers so repeated CLI invocations in one process don't stack
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for ``name``.

    Names outside the package namespace are nested under it.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
