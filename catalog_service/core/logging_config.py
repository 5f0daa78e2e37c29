"""
Logging setup
"""
import logging
import sys

from catalog_service.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = None):
    """Configure root logging once for the process."""
    level = (level or settings.LOG_LEVEL).upper()

    root = logging.getLogger()
    if not any(getattr(h, "_catalog_handler", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._catalog_handler = True
        root.addHandler(handler)
    root.setLevel(level)

    # Quiet noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
