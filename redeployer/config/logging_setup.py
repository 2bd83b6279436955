"""Root logger setup for command-line runs."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOG_FORMAT = "time=%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def config_configure_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Install a single text handler on the root logger.

    Repeated calls replace the previously installed handler, so the entrypoint
    can configure logging before settings load and again once the configured
    level is known.

    Args:
        level: Logging level name.
        stream: Output stream, defaults to stdout.

    Returns:
        None: Configures the root logger as side effect.

    Raises:
        ValueError: Raised when the level name is unknown.
    """

    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=stream or sys.stdout,
        force=True,
    )
