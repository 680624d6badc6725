"""Console logging for seeding runs."""

from __future__ import annotations

import logging

from reseed.domain.seeding import PROGRESS_LOGGER


class ProgressFormatter(logging.Formatter):
    """Print per-record progress lines bare and everything else with time and origin."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s [%(name)s] %(message)s", datefmt="%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        if record.name == PROGRESS_LOGGER and record.levelno == logging.INFO:
            return record.getMessage()
        return super().format(record)


def configure_logging(*, verbose: bool = False, force: bool = False) -> None:
    """Send log output to stderr; ``verbose`` adds the gateway's DEBUG lines."""

    handler = logging.StreamHandler()
    handler.setFormatter(ProgressFormatter())
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        handlers=[handler],
        force=force,
    )
