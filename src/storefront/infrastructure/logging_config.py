"""Logging setup for the command-line entry point."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
    )
    # requests' connection pool is chatty at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
