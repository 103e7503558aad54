"""Loguru configuration shared by every literate_pages module.

Importing this module replaces loguru's default sink with a stderr sink that
honours :data:`filter`; the CLI adjusts ``filter.level`` for ``--verbose`` and
``--quiet``.

Examples
--------
>>> from literate_pages.log import filter, logger
>>> filter.level = "DEBUG"
>>> logger.debug("segmented {count} sections", count=3)  # doctest: +SKIP
"""

from __future__ import annotations

import re
import sys

import loguru
from loguru import logger as logger

LOG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level>"
    " | <cyan>{name}</cyan> - <level>{message}</level>\n{exception}"
)


class LogFilter:
    """Filter messages by minimum level and an optional regex.

    Filtered messages are discarded before formatting.
    """

    def __init__(self, level: str, regex: str | None = None) -> None:
        """Create a new filter.

        Parameters
        ----------
        level : str
            Minimum level to emit, one of ``DEBUG``, ``INFO``, ``WARNING``,
            ``ERROR`` or ``CRITICAL``.
        regex : str, optional
            Discard messages matching this pattern; ``None`` disables it.
        """
        self.level = level
        self.regex = regex

    def __call__(self, record: loguru.Record) -> bool:
        """Loguru needs the filter to be callable."""
        levelno = logger.level(self.level).no
        if record["level"].no < levelno:
            return False
        if self.regex is None:
            return True
        return not re.search(self.regex, record["message"])


filter = LogFilter("INFO")  # noqa: A001 - mirrors loguru's keyword
logger.remove()
logger.add(sys.stderr, format=LOG_FORMAT, filter=filter)

__all__ = ["LogFilter", "filter", "logger"]
