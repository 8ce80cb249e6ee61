"""Structured logging helpers for WorkMatch."""

import logging
from typing import Optional, Union


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that stamps a component field on every record.

    Per-call ``extra`` fields are merged over the adapter's own.
    """

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(
    name: str, component: Optional[str] = None
) -> Union[logging.Logger, ComponentLoggerAdapter]:
    """Get a logger, optionally tagging all its records with a component.

    Args:
        name: Logger name (typically __name__)
        component: Component identifier such as "matching" or "database"

    Example:
        >>> logger = get_logger(__name__, component="matching")
        >>> logger.info("Ranking started", extra={"event": "matching.rank.started"})
    """
    logger = logging.getLogger(name)
    if component:
        return ComponentLoggerAdapter(logger, {"component": component})
    return logger
