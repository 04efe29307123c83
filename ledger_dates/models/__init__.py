"""
Data Models Package

This package contains all Pydantic models used by Ledger Dates.
Compiled formats are frozen; audit events are append-only records.
"""

from ledger_dates.models.date_format import (
    COMPLETABLE_SHAPES,
    FIELD_MARKERS,
    GERMAN_FORMAT,
    CompiledFormat,
    DateComponent,
    DateField,
    FieldAtom,
    FormatValidationResult,
    LiteralAtom,
    PartialDate,
    Segment,
    ValidationIssue,
)
from ledger_dates.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Date format models
    "COMPLETABLE_SHAPES",
    "FIELD_MARKERS",
    "GERMAN_FORMAT",
    "CompiledFormat",
    "DateComponent",
    "DateField",
    "FieldAtom",
    "FormatValidationResult",
    "LiteralAtom",
    "PartialDate",
    "Segment",
    "ValidationIssue",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
