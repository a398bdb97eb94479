# this_file: rasterize_text/verbosity.py
"""
Logging verbosity levels and handler setup for the command line.
"""

from __future__ import annotations

import logging
import os
import sys
from enum import Enum

from .constants import LOG_LEVEL_ENV, TRACE

LOG_FORMAT = "%(asctime)s [%(levelname)s] - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

logging.addLevelName(TRACE, "TRACE")


class Verbosity(str, Enum):
    """Named logging levels accepted by --verbosity and LOGLEVEL."""

    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"
    TRACE = "trace"

    def __str__(self) -> str:
        return self.value

    @property
    def level(self) -> int:
        return {
            Verbosity.ERROR: logging.ERROR,
            Verbosity.WARN: logging.WARNING,
            Verbosity.INFO: logging.INFO,
            Verbosity.DEBUG: logging.DEBUG,
            Verbosity.TRACE: TRACE,
        }[self]

    @classmethod
    def parse(cls, name: str) -> Verbosity:
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown verbosity level: {name}") from None


def configure_logging(verbosity: Verbosity | str = Verbosity.INFO) -> Verbosity:
    """
    Send log records to stderr at the requested level.

    LOGLEVEL in the environment takes precedence over verbosity when it
    names a known level.

    Returns:
        The verbosity actually applied
    """
    verbosity = Verbosity.parse(str(verbosity))
    env_level = os.environ.get(LOG_LEVEL_ENV)
    if env_level:
        try:
            verbosity = Verbosity.parse(env_level)
        except ValueError:
            logging.getLogger(__name__).warning(
                "Ignoring %s=%r, expected one of %s",
                LOG_LEVEL_ENV,
                env_level,
                ", ".join(v.value for v in Verbosity),
            )

    logging.basicConfig(
        level=verbosity.level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stderr,
        force=True,
    )
    return verbosity
