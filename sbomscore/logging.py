"""Logging helpers for sbomscore.

Modules obtain their logger through :func:`getLogger` and emit structured
events with :func:`log_event` so that context values land both in the message
text and in ``record.context``. Every logger lives under the ``sbomscore``
namespace, so applications can tune the whole library with one logger.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

LOGGER_NAMESPACE = "sbomscore"

# Digits kept when scores and weights are rendered into messages
FLOAT_PRECISION = 2


def getLogger(name: str) -> logging.Logger:
    """Return a logger under the ``sbomscore`` namespace."""
    if name != LOGGER_NAMESPACE and not name.startswith(f"{LOGGER_NAMESPACE}."):
        name = f"{LOGGER_NAMESPACE}.{name}"
    return logging.getLogger(name)


def build_log_context(**context: Any) -> dict[str, Any]:
    return {key: value for key, value in context.items() if value is not None}


def format_log_value(value: Any) -> str:
    """Render a context value for the message text.

    Floats are rounded, enums show their value and sequences of keys are
    joined with commas.
    """
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float):
        return str(round(value, FLOAT_PRECISION))
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (list, tuple, set, frozenset)):
        items = sorted(value) if isinstance(value, (set, frozenset)) else value
        return ",".join(format_log_value(item) for item in items)
    return str(value)


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **context: Any,
) -> None:
    if not logger.isEnabledFor(level):
        return
    safe_context = build_log_context(**context)
    suffix = " ".join(f"{key}={format_log_value(value)}" for key, value in safe_context.items())
    message = f"{event} {suffix}".strip()
    logger.log(level, message, extra={"context": safe_context})


def log_debug(logger: logging.Logger, event: str, **context: Any) -> None:
    log_event(logger, logging.DEBUG, event, **context)


def log_info(logger: logging.Logger, event: str, **context: Any) -> None:
    log_event(logger, logging.INFO, event, **context)


def log_warning(logger: logging.Logger, event: str, **context: Any) -> None:
    log_event(logger, logging.WARNING, event, **context)
