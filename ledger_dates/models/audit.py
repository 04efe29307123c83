"""
Audit Models for Ledger Dates

Every significant step the date-entry layer takes is recorded as an
AuditEvent and written to the structured log. This provides:
1. Traceability of what the user typed and what it resolved to
2. Debugging information when a template misbehaves
3. A record of when printed years had to be widened

DESIGN DECISION: The pure format functions never log. Only the calling
layer (see orchestrator.py) turns their results and errors into events.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Template handling
    FORMAT_COMPILED = "format_compiled"
    FORMAT_REJECTED = "format_rejected"
    FORMAT_WARNING = "format_warning"

    # User input
    ENTRY_PARSED = "entry_parsed"
    ENTRY_REJECTED = "entry_rejected"
    JOURNAL_DATE_FALLBACK = "journal_date_fallback"

    # Output
    DATE_PRINTED = "date_printed"
    SHORT_YEAR_WIDENED = "short_year_widened"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of the audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # Correlation - for tracking related events (e.g. all keystrokes of one entry)
    correlation_id: Optional[UUID] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)

    error_type: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_type": self.error_type,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.entry_parsed("2.12.", date(2015, 12, 2), reference)
    """

    @staticmethod
    def format_compiled(template: str, segment_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FORMAT_COMPILED,
            severity=AuditSeverity.DEBUG,
            description=f"Date format compiled: {template}",
            details={
                "template": template,
                "segment_count": segment_count,
            },
        )

    @staticmethod
    def format_rejected(template: str, error: Exception) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FORMAT_REJECTED,
            severity=AuditSeverity.ERROR,
            description=f"Date format rejected: {template}",
            details={"template": template},
            error_type=type(error).__name__,
            error_message=str(error),
        )

    @staticmethod
    def format_warning(template: str, message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FORMAT_WARNING,
            severity=AuditSeverity.WARNING,
            description=f"Date format {template} needs attention",
            details={
                "template": template,
                "message": message,
            },
        )

    @staticmethod
    def entry_parsed(
        text: str,
        resolved: str,
        reference: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_PARSED,
            severity=AuditSeverity.DEBUG,
            correlation_id=correlation_id,
            description=f"Entry {text!r} resolved to {resolved}",
            details={
                "text": text,
                "resolved": resolved,
                "reference": reference,
            },
        )

    @staticmethod
    def entry_rejected(
        text: str,
        reference: str,
        error: Exception,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_REJECTED,
            severity=AuditSeverity.INFO,
            correlation_id=correlation_id,
            description=f"Entry {text!r} rejected",
            details={
                "text": text,
                "reference": reference,
            },
            error_type=type(error).__name__,
            error_message=str(error),
        )

    @staticmethod
    def journal_date_fallback(
        text: str,
        resolved: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.JOURNAL_DATE_FALLBACK,
            correlation_id=correlation_id,
            description=f"Entry {text!r} read as journal date {resolved}",
            details={
                "text": text,
                "resolved": resolved,
            },
        )

    @staticmethod
    def date_printed(value: str, text: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATE_PRINTED,
            severity=AuditSeverity.DEBUG,
            description=f"Date {value} printed as {text!r}",
            details={
                "date": value,
                "text": text,
            },
        )

    @staticmethod
    def short_year_widened(value: str, text: str, template: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SHORT_YEAR_WIDENED,
            severity=AuditSeverity.INFO,
            description=f"Two-digit year for {value} is ambiguous, printed {text!r}",
            details={
                "date": value,
                "text": text,
                "template": template,
            },
        )
