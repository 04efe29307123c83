"""
Tests for Ledger Dates models

Test strategy:
1. Unit tests for individual components (models, compiler, matcher, completer)
2. Flow tests for the date-entry layer (with a recording logger)
3. No real clock in tests (inject a fixed "today")
"""

from uuid import uuid4

import pytest

from ledger_dates.formats import compile_format
from ledger_dates.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from ledger_dates.models.date_format import (
    COMPLETABLE_SHAPES,
    FIELD_MARKERS,
    DateComponent,
    DateField,
    FormatValidationResult,
    LiteralAtom,
    PartialDate,
    ValidationIssue,
)


class TestDateFields:
    """Tests for the field enums."""

    def test_markers(self):
        """Test every marker maps to its field."""
        assert FIELD_MARKERS == {
            "d": DateField.DAY,
            "m": DateField.MONTH,
            "y": DateField.SHORT_YEAR,
            "Y": DateField.LONG_YEAR,
        }

    def test_both_years_fill_year_component(self):
        """Test %y and %Y fill the same component."""
        assert DateField.SHORT_YEAR.component is DateComponent.YEAR
        assert DateField.LONG_YEAR.component is DateComponent.YEAR

    def test_widths(self):
        """Test input widths per field."""
        assert DateField.DAY.max_width == 2
        assert DateField.MONTH.max_width == 2
        assert DateField.SHORT_YEAR.max_width == 4
        assert DateField.LONG_YEAR.max_width == 4

    def test_ranges(self):
        assert DateField.DAY.valid_range == (1, 31)
        assert DateField.MONTH.valid_range == (1, 12)
        assert DateField.LONG_YEAR.valid_range == (1, 9999)


class TestFormatModels:
    """Tests for compiled format models."""

    def test_empty_literal_rejected(self):
        """Test a literal atom needs text."""
        with pytest.raises(ValueError):
            LiteralAtom(text="")

    def test_stopping_shapes(self):
        """Test shapes are cumulative per segment."""
        shapes = compile_format("%d-[%m-[%y]]").stopping_shapes()
        assert shapes == list(COMPLETABLE_SHAPES)

    def test_components(self):
        assert compile_format("%m/%d").components == frozenset(
            {DateComponent.DAY, DateComponent.MONTH}
        )

    def test_partial_date_shape(self):
        """Test only typed components count."""
        assert PartialDate().shape == frozenset()
        assert PartialDate(day=1, year=2016).shape == frozenset(
            {DateComponent.DAY, DateComponent.YEAR}
        )


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.ENTRY_PARSED,
            description="Entry parsed",
        )
        assert event.event_type == AuditEventType.ENTRY_PARSED
        assert event.severity == AuditSeverity.INFO
        assert event.timestamp.tzinfo is not None

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.DATE_PRINTED,
            description="Date printed",
            details={"date": "2016-09-20", "text": "20.09.16"},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "date_printed"
        assert log_dict["correlation_id"] is None
        assert log_dict["details"]["text"] == "20.09.16"

    def test_audit_event_builder_entry_rejected(self):
        """Test AuditEventBuilder.entry_rejected."""
        correlation_id = uuid4()
        event = AuditEventBuilder.entry_rejected(
            text="x",
            reference="2016-09-20",
            error=ValueError("bad input"),
            correlation_id=correlation_id,
        )
        assert event.event_type == AuditEventType.ENTRY_REJECTED
        assert event.correlation_id == correlation_id
        assert event.error_type == "ValueError"
        assert event.error_message == "bad input"

    def test_audit_event_builder_format_rejected(self):
        """Test AuditEventBuilder.format_rejected is an error."""
        event = AuditEventBuilder.format_rejected("%q", ValueError("unknown"))
        assert event.severity == AuditSeverity.ERROR
        assert event.details == {"template": "%q"}


class TestFormatValidationResult:
    """Tests for FormatValidationResult model."""

    def test_has_errors(self):
        """Test has_errors property."""
        result = FormatValidationResult(
            template="%m",
            syntax_valid=True,
            semantic_valid=False,
            is_valid=False,
            issues=[
                ValidationIssue(
                    field="segments",
                    issue_type="no_completable_shape",
                    message="Nothing completable",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.error_count == 1

    def test_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = FormatValidationResult(
            template="%d.%m",
            syntax_valid=True,
            semantic_valid=True,
            is_valid=True,
            issues=[
                ValidationIssue(
                    field="year",
                    issue_type="missing_field",
                    message="No year",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.error_count == 0

    def test_severity_is_checked(self):
        with pytest.raises(ValueError):
            ValidationIssue(field="x", issue_type="x", message="x", severity="fatal")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
