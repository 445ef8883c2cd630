import logging
import os
from typing import Optional


def configure_logging(level: Optional[str] = None) -> None:
    # Centralized logging configuration
    level = level or os.getenv("LOG_LEVEL", "info")
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
