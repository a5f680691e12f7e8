"""Root logger setup for the tracker service."""
import logging
from typing import Optional

from tracker.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    level_name = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
    if not settings.DEBUG:
        # SQL echo stays off unless debugging
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
