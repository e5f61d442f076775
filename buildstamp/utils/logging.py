"""Simple logging utilities for buildstamp.

Build messages come in two tiers. Lifecycle messages ("Building on CI.",
"Building <name> <version>") are logged at INFO and show by default.
Diagnostics such as the raw build number are logged at DEBUG and only show
with ``--verbose``.
"""

import logging
import sys
from typing import Mapping, Optional

from buildstamp.config.constants import (
    LOG_DATE_FORMAT,
    LOG_FORMAT,
    LOG_LEVEL_ENV_VAR,
    LOGGER_NAME,
)
from buildstamp.config.settings import get_env_var


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given module name.

    The package logger gets a single stderr handler the first time any
    buildstamp logger is requested; module loggers propagate to it.
    """
    package_logger = logging.getLogger(LOGGER_NAME)

    # Only configure if not already configured
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        package_logger.addHandler(handler)
        package_logger.setLevel(logging.INFO)

    return logging.getLogger(name)


def configure_logging(
    verbose: bool = False,
    quiet: bool = False,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """Set the package log level from CLI flags or BUILDSTAMP_LOG_LEVEL.

    Returns:
        The level that was applied.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level_name = get_env_var(LOG_LEVEL_ENV_VAR, environ)
        level = getattr(logging, level_name.upper()) if level_name else logging.INFO

    get_logger(LOGGER_NAME).setLevel(level)
    return level
