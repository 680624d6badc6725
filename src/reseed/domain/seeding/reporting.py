from __future__ import annotations

import logging

PROGRESS_LOGGER = "reseed.seeding"

log = logging.getLogger(PROGRESS_LOGGER)


class LoggingReporter:
    """Reporter writing progress lines at INFO and warnings at WARNING."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._log = logger or log

    def report(self, line: str) -> None:
        self._log.info(line)

    def warn(self, line: str) -> None:
        self._log.warning(line)
