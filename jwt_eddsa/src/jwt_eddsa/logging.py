"""Structured logging setup for jwt-eddsa.

Log lines are JSON objects carrying ``ts``, ``level``, ``component`` (the
stdlib logger name, e.g. ``jwt_eddsa.registry``) and ``msg``, plus whatever
key/value context the call site binds.
"""
from __future__ import annotations

import logging
import sys
from typing import IO

import structlog


def _level(name: str | None) -> int:
    level = logging.getLevelName((name or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def _logger_name_as_component(
    _logger: object, _name: str, event_dict: dict[str, object]
) -> dict[str, object]:
    name = event_dict.pop("logger", None)
    event_dict.setdefault("component", name or "jwt_eddsa")
    return event_dict


def configure_logging(level: str | None = None, stream: IO[str] | None = None) -> None:
    """Send JSON log lines at ``level`` and above to ``stream`` (stderr by default).

    Loggers are not cached so that reconfiguring, for example per CLI
    invocation, takes effect for module-level loggers as well.
    """

    numeric_level = _level(level)
    logging.basicConfig(
        level=numeric_level,
        handlers=[logging.StreamHandler(stream or sys.stderr)],
        format="%(message)s",
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", key="ts"),
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            _logger_name_as_component,
            structlog.processors.EventRenamer("msg"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=False,
    )


__all__ = ["configure_logging"]
