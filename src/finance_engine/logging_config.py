"""Logging setup for hosts that do not configure logging themselves."""

from __future__ import annotations

import logging

from finance_engine.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Attach a stream handler to the ``finance_engine`` logger.

    Calling this more than once does not stack handlers. When ``level`` is
    omitted the ``FINANCE_ENGINE_LOG_LEVEL`` setting is used.
    """
    logger = logging.getLogger("finance_engine")
    logger.setLevel(level if level is not None else get_settings().log_level)

    if not any(getattr(h, "_finance_engine", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._finance_engine = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
