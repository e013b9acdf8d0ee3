"""Logging bootstrap shared by the API and the CLI."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the current process."""

    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
