"""Logging setup shared by the API, the worker and the CLI."""

import logging
from typing import Optional

from app.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def configure_logging(level: Optional[str] = None) -> None:
    """Configure the root logger once."""
    global _configured
    if _configured:
        return

    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    _configured = True
