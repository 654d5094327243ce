"""Logging configuration for pipedef."""

import logging
import os
import sys

LOG_LEVEL_ENV_VAR = "PIPEDEF_LOG_LEVEL"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(
    name: str, level: str = "INFO", json_output: bool = False
) -> logging.Logger:
    """
    Attach a single stream handler to the logger ``name``.

    Logs go to stdout, or to stderr when ``json_output`` is set so stdout only
    carries the JSON document. Calling this again replaces the handler.

    Raises:
        ValueError: If ``level`` is not one of LOG_LEVELS
    """
    level_name = level.upper()
    if level_name not in LOG_LEVELS:
        raise ValueError(
            f"Unknown log level '{level}'. Use one of: {', '.join(LOG_LEVELS)}"
        )

    handler = logging.StreamHandler(sys.stderr if json_output else sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger(name)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level_name)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a component logger under the pipedef namespace.

    Handlers live on the ``pipedef`` logger (see ``setup_logger``), so
    component loggers only need a name and inherit level and output.
    """
    return logging.getLogger(f"pipedef.{name}")


def default_log_level() -> str:
    """Log level from the environment, falling back to INFO."""
    return os.environ.get(LOG_LEVEL_ENV_VAR, "INFO")
