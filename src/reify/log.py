from __future__ import annotations

import logging
from typing import Union

LOGGER_NAME = "reify"


def get_logger(name: str = "") -> logging.Logger:
    return logging.getLogger(f"{LOGGER_NAME}.{name}" if name else LOGGER_NAME)


def configure_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Attach the [reify] stderr handler once and set the level."""
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[reify] %(message)s"))
        logger.addHandler(handler)
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)
    return logger
