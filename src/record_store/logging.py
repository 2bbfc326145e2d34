"""structlog setup for applications embedding the record store."""
from __future__ import annotations

import logging
import os
import sys
from typing import Any, MutableMapping, TextIO

import structlog

_PACKAGE_PREFIX = "record_store."


def configure_logging(level: str | None = None, *, stream: TextIO | None = None) -> None:
    """Emit store events as JSON lines on ``stream`` (stdout by default).

    Each line carries ``ts``, ``level``, ``component`` and ``msg``. The
    component is the emitting module inside the package (``store``,
    ``resolver``), and path values such as the record ``path`` or the
    ``root`` of a clear are rendered as strings.
    """

    numeric_level = _numeric_level(level)
    logging.basicConfig(
        level=numeric_level,
        handlers=[logging.StreamHandler(stream or sys.stdout)],
        format="%(message)s",
        force=True,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", key="ts"),
            _shape_store_event,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=True,
    )


def _numeric_level(level: str | None) -> int:
    value = logging.getLevelName((level or "INFO").upper())
    return value if isinstance(value, int) else logging.INFO


def _shape_store_event(
    logger: Any, _method: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    name = getattr(logger, "name", None) or "record_store"
    event_dict.setdefault("component", name.removeprefix(_PACKAGE_PREFIX))
    event_dict.setdefault("msg", event_dict.pop("event", ""))
    for field, value in event_dict.items():
        if isinstance(value, os.PathLike):
            event_dict[field] = os.fspath(value)
    return event_dict


__all__ = ["configure_logging"]
