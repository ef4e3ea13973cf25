"""
Structured JSON logging for the scoring core.

Every record carries event_type, level, logger, an ISO-8601 timestamp and
whatever context the caller bound (transaction_id, fraud_score, ...).
Submitter identities and credentials never reach the output: keys listed in
REDACTED_KEYS are masked before rendering.

LOG_LEVEL selects the threshold, LOG_FORMAT=console switches to the
human-readable renderer. No backend_smpcguard imports here, so any module
can import it first.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

REDACTED_KEYS = frozenset({"identity", "email", "api_key", "authorization"})
REDACTED = "***"


def _add_timestamp(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
    return event_dict


def _redact_sensitive(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for key in REDACTED_KEYS.intersection(event_dict):
        value = event_dict[key]
        # Already-masked values (e.g. "AIza***") are left alone.
        if not (isinstance(value, str) and value.endswith(REDACTED)):
            event_dict[key] = REDACTED
    return event_dict


def _rename_event(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog's 'event' becomes event_type."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def configure_structlog(level: str | None = None, fmt: str | None = None) -> None:
    """(Re)configure structlog. Defaults come from LOG_LEVEL and LOG_FORMAT."""
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).strip().upper()
    level_value = getattr(logging, level_name, logging.INFO)
    fmt = (fmt or os.getenv("LOG_FORMAT", "json")).strip().lower()

    renderer: Any
    if fmt == "console":
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            _add_timestamp,
            _redact_sensitive,
            _rename_event,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a structured logger bound to the module name.

        logger = get_logger(__name__)
        logger.info("transaction_scored", transaction_id=txn.id, fraud_score=0.42)
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_transaction(transaction_id: str) -> structlog.BoundLogger:
    """Logger with transaction_id bound to every call."""
    return get_logger("backend_smpcguard").bind(transaction_id=transaction_id)
