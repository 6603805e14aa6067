"""Logging setup.

Configuration via environment variables:
    LAZYMAN_LOG_LEVEL: Root level for the lazyman loggers (default: INFO)
"""

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure the lazyman logger hierarchy.

    Safe to call more than once; the handler is only attached the first time.
    httpx request logging is turned down to WARNING so DEBUG stays readable.
    """
    level_name = (level or os.environ.get("LAZYMAN_LOG_LEVEL", "INFO")).upper()

    root = logging.getLogger("lazyman")
    root.setLevel(level_name)

    if not any(getattr(h, "_lazyman", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._lazyman = True
        root.addHandler(handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
