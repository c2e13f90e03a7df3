"""Logging setup: standard library logging, configured once per process."""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging and the app logger level."""
    logging.basicConfig(
        format=LOG_FORMAT,
        stream=sys.stdout,
        level=level.upper(),
    )
    logging.getLogger("todo_app").setLevel(level.upper())
