"""
Main Orchestrator for Ledger Dates

This module ties the date-format pipeline to the transaction-entry
screen. It defines the flow for the date prompt:

1. Startup: template -> compile -> validate -> CompiledFormat (once)
2. Keystroke: text -> match -> complete -> date (or "invalid so far")
3. Display: date -> print -> text (suggestion, confirmation)

DESIGN DECISION: The orchestrator is the only place that knows about
"today", settings and logging. The functions it calls are pure, take
their reference date as an argument, and report problems by raising.
Here those errors are audited and re-raised to the screen, which
decides whether to re-prompt.
"""

from datetime import date
from typing import Optional
from uuid import UUID

from ledger_dates.audit import AuditLogger, configure_log_level
from ledger_dates.config import get_settings
from ledger_dates.formats import (
    Clock,
    FormatError,
    LedgerDatesError,
    UnusableFormatError,
    compile_format,
    most_recent_weekday,
    parse_with_journal_fallback,
    parse_with_reference,
    print_date,
    short_year_fits,
)
from ledger_dates.models.audit import AuditEventBuilder
from ledger_dates.models.date_format import CompiledFormat, DateField
from ledger_dates.validation import FormatValidator


class DateEntryFlow:
    """
    Orchestrates the date prompt of the transaction-entry screen.

    Flow:
    1. suggest()  -> initial text of the entry box (today)
    2. context()  -> live feedback while the user types
    3. parse()    -> the date the entry resolves to, on submit
    4. render()   -> text shown when confirming the transaction
    """

    def __init__(
        self,
        date_format: CompiledFormat,
        clock: Clock = date.today,
        journal_date_fallback: bool = True,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._format = date_format
        self._clock = clock
        self._journal_date_fallback = journal_date_fallback
        self._audit_logger = audit_logger

    @classmethod
    def from_template(
        cls,
        template: str,
        clock: Clock = date.today,
        journal_date_fallback: bool = True,
        audit_logger: Optional[AuditLogger] = None,
    ) -> "DateEntryFlow":
        """
        Compile and validate a template and build a flow around it.

        Validation warnings are logged; a template that compiles but
        can never yield a date is rejected like one that does not compile.

        Raises:
            FormatError: The template does not compile
            UnusableFormatError: No accepted input can be completed
        """
        try:
            compiled = compile_format(template)
            result = FormatValidator().validate(template)
            if not result.is_valid:
                raise UnusableFormatError(
                    template,
                    [issue.message for issue in result.issues if issue.severity == "error"],
                )
        except FormatError as e:
            if audit_logger:
                audit_logger.log(AuditEventBuilder.format_rejected(template, e))
            raise

        if audit_logger:
            for warning in result.warnings:
                audit_logger.log(AuditEventBuilder.format_warning(template, warning))
            audit_logger.log(
                AuditEventBuilder.format_compiled(template, len(compiled.segments))
            )
        return cls(
            compiled,
            clock=clock,
            journal_date_fallback=journal_date_fallback,
            audit_logger=audit_logger,
        )

    @property
    def date_format(self) -> CompiledFormat:
        return self._format

    def today(self) -> date:
        return self._clock()

    def parse(
        self,
        text: str,
        reference: Optional[date] = None,
        correlation_id: Optional[UUID] = None,
    ) -> date:
        """
        Resolve the entered text to a date.

        Args:
            text: What the user typed
            reference: Date to complete against (defaults to today)
            correlation_id: Ties together the keystrokes of one entry

        Raises:
            ParseError: The text does not fit the format
            DateError: The text fits but names no usable date
        """
        reference = reference or self.today()
        try:
            if self._journal_date_fallback:
                resolved, as_journal_date = parse_with_journal_fallback(
                    self._format, text, reference
                )
            else:
                resolved = parse_with_reference(self._format, text, reference)
                as_journal_date = False
        except LedgerDatesError as e:
            self._log_rejected(text, reference, e, correlation_id)
            raise

        if as_journal_date:
            if self._audit_logger:
                self._audit_logger.log(AuditEventBuilder.journal_date_fallback(
                    text=text,
                    resolved=resolved.isoformat(),
                    correlation_id=correlation_id,
                ))
            return resolved

        if self._audit_logger:
            self._audit_logger.log(AuditEventBuilder.entry_parsed(
                text=text,
                resolved=resolved.isoformat(),
                reference=reference.isoformat(),
                correlation_id=correlation_id,
            ))
        return resolved

    def context(self, text: str, reference: Optional[date] = None) -> list[str]:
        """
        Live feedback for the entry box.

        Returns the ISO date the text currently resolves to, or an
        empty list while the text is invalid.
        """
        try:
            return [self.parse(text, reference).isoformat()]
        except LedgerDatesError:
            return []

    def render(self, value: date) -> str:
        """Print a date in the configured format."""
        text = print_date(self._format, value)
        if self._audit_logger:
            if (
                DateField.SHORT_YEAR in self._format.fields
                and not short_year_fits(self._format, value)
            ):
                self._audit_logger.log(AuditEventBuilder.short_year_widened(
                    value=value.isoformat(),
                    text=text,
                    template=self._format.template,
                ))
            else:
                self._audit_logger.log(
                    AuditEventBuilder.date_printed(value.isoformat(), text)
                )
        return text

    def suggest(self) -> str:
        """Initial text of the date prompt: today in the configured format."""
        return self.render(self.today())

    def weekday(self, iso_weekday: int, reference: Optional[date] = None) -> date:
        """Most recent date with the given ISO weekday, on or before reference."""
        return most_recent_weekday(iso_weekday, reference or self.today())

    def _log_rejected(
        self,
        text: str,
        reference: date,
        error: Exception,
        correlation_id: Optional[UUID],
    ) -> None:
        if self._audit_logger:
            self._audit_logger.log(AuditEventBuilder.entry_rejected(
                text=text,
                reference=reference.isoformat(),
                error=error,
                correlation_id=correlation_id,
            ))


def create_app_components(clock: Clock = date.today) -> DateEntryFlow:
    """
    Factory function to create the date-entry flow from settings.

    Returns:
        DateEntryFlow configured from the environment / .env file
    """
    settings = get_settings().dates
    configure_log_level(settings.log_level)

    return DateEntryFlow.from_template(
        settings.date_format,
        clock=clock,
        journal_date_fallback=settings.journal_date_fallback,
        audit_logger=AuditLogger(),
    )
