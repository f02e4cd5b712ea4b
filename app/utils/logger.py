import logging
import sys
from typing import Optional
from app.config import settings

DEFAULT_LOGGER_NAME = "PhotoGallery"

def setup_logger(name: str = DEFAULT_LOGGER_NAME, level: Optional[str] = None):
    """Stdout logger at `level`, falling back to LOG_LEVEL (INFO unless configured)."""
    logger = logging.getLogger(name)
    logger.setLevel(level or settings.log_level)

    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    handler.setFormatter(formatter)

    # Avoid duplicate handlers
    if not logger.handlers:
        logger.addHandler(handler)

    return logger

logger = setup_logger()
