"""
Audit Logger

DESIGN DECISION: The date-entry layer logs every template it loads and
every entry it resolves or rejects. This provides:
1. A trace of what the user typed and what date it became
2. Debugging capability for surprising completions
3. Visibility into templates rejected at startup

The logger is synchronous: date entry happens per keystroke and the
events are small, so there is nothing worth deferring.
"""

import logging
from typing import Any, Optional
from uuid import UUID, uuid4

import structlog

from ledger_dates.models.audit import AuditEvent, AuditSeverity


LOGGER_NAME = "ledger_dates"

# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_log_level(level: str) -> None:
    """Set the minimum level for everything logged under ledger_dates."""
    logging.basicConfig(format="%(message)s")
    logging.getLogger(LOGGER_NAME).setLevel(level)


class AuditLogger:
    """
    Central audit logging service.

    Writes each AuditEvent as one structured log line at the event's
    severity.
    """

    def __init__(self, logger: Optional[Any] = None):
        """
        Initialize audit logger.

        Args:
            logger: A structlog-compatible logger. Defaults to the
                    package logger.
        """
        self._logger = logger or structlog.get_logger(LOGGER_NAME)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event."""
        log_dict = event.to_log_dict()

        if event.severity is AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity is AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity is AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this when a new date entry starts and pass it along with
    every keystroke of that entry.
    """
    return uuid4()
