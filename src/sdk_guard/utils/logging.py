"""Logging for sdk-guard.

Every module logs under the ``sdk_guard`` logger. Components that act on one
file or one mode bind it once with :func:`get_logger_with_context`; the bound
fields are rendered after the message as ``key=value`` pairs, e.g.::

    INFO: Added com.adjust.sdk dependency path=Packages/manifest.json
"""

import logging
import sys
from collections.abc import Mapping
from typing import Any, TextIO

ROOT_LOGGER = "sdk_guard"

LOG_FORMATS = {
    "plain": "%(levelname)s: %(message)s",
    "structured": "%(asctime)s %(levelname)s %(name)s %(message)s",
}


def format_fields(fields: Mapping[str, Any]) -> str:
    """Render context fields as ``key=value`` pairs.

    Values containing whitespace are quoted so the pairs stay splittable.
    """
    pairs = []
    for key, value in fields.items():
        text = str(value)
        if not text or any(ch.isspace() for ch in text):
            text = f'"{text}"'
        pairs.append(f"{key}={text}")
    return " ".join(pairs)


class ContextFormatter(logging.Formatter):
    """Formatter that appends the record's context fields."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        fields = getattr(record, "context", None)
        if fields:
            return f"{message} {format_fields(fields)}"
        return message


def configure_logging(
    level: str = "INFO",
    structured: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Configure the ``sdk_guard`` logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        structured: Prefix lines with timestamp and logger name
        stream: Output stream, stderr when not given
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(ContextFormatter(LOG_FORMATS["structured" if structured else "plain"]))

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers = [handler]
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger for an sdk-guard module.

    Args:
        name: Module name (will be prefixed with sdk_guard)
    """
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter carrying fixed context fields.

    Fields passed as ``extra`` on a single call are merged over the bound
    ones.
    """

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["context"] = {**self.extra, **extra.pop("context", {})}
        kwargs["extra"] = extra
        return msg, kwargs

    def bind(self, **context: Any) -> "ContextLogger":
        """Return a logger with ``context`` added to the bound fields."""
        return ContextLogger(self.logger, {**self.extra, **context})


def get_logger_with_context(name: str, **context: Any) -> ContextLogger:
    """Get a logger that appends ``context`` to every message.

    Example:
        log = get_logger_with_context("manifest", path="Packages/manifest.json")
        log.info("Added com.adjust.sdk dependency")
    """
    return ContextLogger(get_logger(name), context)
