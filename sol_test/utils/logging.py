# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Logging setup for the sol-test CLI."""

import logging
import sys
from enum import Enum

import errorhandler

HANDLER_NAME = "sol-test"


class VerbosityLevel(str, Enum):
    """Log levels selectable on the command line."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def configure_logging(
    level: VerbosityLevel, error_handler: errorhandler.ErrorHandler
) -> None:
    """Install a single stderr handler on the root logger.

    Log records go to stderr so they never mix with the test report, which
    is written to stdout.

    Args:
        level: Minimum level of records to emit.
        error_handler: Handler tracking whether an error was logged; reset here.
    """
    logger = logging.getLogger()
    for existing in [h for h in logger.handlers if h.get_name() == HANDLER_NAME]:
        logger.removeHandler(existing)
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.value))
    error_handler.reset()
