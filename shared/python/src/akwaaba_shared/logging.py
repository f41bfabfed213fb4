"""
logging.py — structlog configuration shared by the API and the admin CLI.

Output is JSON or console depending on settings.log_format. Call
configure_logging() once at process startup (the app factory and the CLI
both do). Credentials never reach the output: any event key that names a
password, token, secret or authorization header is masked.

Usage:
    from akwaaba_shared.logging import configure_logging

    configure_logging()
    log = structlog.get_logger(__name__)
    log.info("property_created", property_id=str(pid), seller_id=user_id)
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from akwaaba_shared.config import settings

REDACTED = "[redacted]"
SENSITIVE_KEY_PARTS = ("password", "token", "secret", "authorization", "service_key")


def redact_secrets(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor: mask values whose key looks like a credential."""
    for key in list(event_dict):
        lowered = key.lower()
        if any(part in lowered for part in SENSITIVE_KEY_PARTS):
            event_dict[key] = REDACTED
    return event_dict


def configure_logging(log_level: str | None = None, log_format: str | None = None) -> None:
    """Configure structlog and the stdlib root logger. Safe to call twice."""
    level_name = (log_level or settings.log_level).upper()
    level = getattr(logging, level_name, logging.INFO)
    fmt = log_format or settings.log_format

    # uvicorn and httpx log through the stdlib; keep them at the same level.
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))

    if fmt == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            redact_secrets,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
