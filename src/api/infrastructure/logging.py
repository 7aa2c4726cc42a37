"""Structlog configuration for the application.

Configures structlog with colored console output for development
and JSON output for production. Credential-bearing keys are masked
before any renderer sees them.
"""

import os
import sys
from typing import Any

import structlog

# Event keys whose values must never reach a log sink.
SENSITIVE_KEYS = frozenset(
    {
        "api_key",
        "access_token",
        "refresh_token",
        "token",
        "authorization",
        "encryption_key",
        "ciphertext",
    }
)

REDACTED = "[redacted]"


def redact_sensitive_values(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor masking values stored under sensitive keys."""
    for key in SENSITIVE_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def configure_logging() -> None:
    """Configure structlog with appropriate processors.

    Uses colored console output for development (when FORCE_COLOR is set
    or running in a TTY), otherwise uses JSON output for production.
    """
    # FORCE_COLOR=1 enables colors even in non-TTY environments (like Docker)
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    is_tty = sys.stdout.isatty()
    use_colors = force_color or is_tty

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        redact_sensitive_values,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if use_colors:
        processors: list[structlog.types.Processor] = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(0),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
