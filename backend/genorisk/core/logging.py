"""
Logging setup. Imported once by the application entry point for its side effect.
"""

import logging
import sys

from genorisk.core.config import get_config

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = None) -> None:
    """Attach a single stream handler to the root logger."""
    level_name = (level or get_config().log_level or "INFO").upper()
    root = logging.getLogger()

    if not any(getattr(h, "_genorisk", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._genorisk = True
        root.addHandler(handler)

    root.setLevel(getattr(logging, level_name, logging.INFO))

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


configure_logging()
