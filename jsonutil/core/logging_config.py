"""Logging setup for the jsonutil package"""

import logging
from typing import Optional

from jsonutil.core.config import Settings

PACKAGE_LOGGER = "jsonutil"


def configure_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """Attach a console handler to the package logger.

    Settings are read from the environment at call time when not given.
    Safe to call repeatedly: the handler is installed once and later calls
    only update its level and format.
    """
    if settings is None:
        settings = Settings()
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(settings.log_level)

    formatter = logging.Formatter(settings.log_format)
    handler = next((h for h in logger.handlers if getattr(h, "_jsonutil_handler", False)), None)
    if handler is None:
        handler = logging.StreamHandler()  # Console output
        handler._jsonutil_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    handler.setFormatter(formatter)

    return logger
