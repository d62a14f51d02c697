"""
Logging setup shared by the CLI and the HTTP app.

The level comes from LOG_LEVEL unless the caller passes one.
"""

import logging
import os
from typing import Optional

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(*, level: Optional[str] = None, fmt: str = _DEFAULT_FORMAT) -> None:
    """Configure root logging once; later calls only adjust the level."""

    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO").upper()

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=level, format=fmt)
    root_logger.setLevel(level)
