"""
Parsing entry points used by the transaction-entry layer.

parse_with_reference() is the composition of matching and completion.
The other functions wrap it the way the entry screen needs:

- parse_date_with_today(): reference taken from a clock
- parse_with_journal_fallback(), parse_date_or_journal_date(): fall back
  to the journal's own absolute date syntax (2016-09-20, 2016/9/20,
  2016.09.20) when the configured format does not match
"""

import re
from collections.abc import Callable
from datetime import date

from ledger_dates.formats.completer import complete_date
from ledger_dates.formats.errors import InvalidCalendarDateError, LedgerDatesError
from ledger_dates.formats.matcher import match_segments
from ledger_dates.models.date_format import CompiledFormat, PartialDate


Clock = Callable[[], date]

JOURNAL_DATE_RE = re.compile(
    r"(?P<year>[0-9]{4})(?P<sep>[-/.])(?P<month>[0-9]{1,2})(?P=sep)(?P<day>[0-9]{1,2})"
)


def parse_with_reference(format: CompiledFormat, text: str, reference: date) -> date:
    """
    Turn user text into a date, resolving missing fields against reference.

    Raises:
        ParseError: The text does not fit the format
        DateError: The fields do not name a valid date
    """
    return complete_date(match_segments(format, text), reference)


def parse_date_with_today(
    format: CompiledFormat,
    text: str,
    clock: Clock = date.today,
) -> date:
    """Parse relative to the current date as reported by clock."""
    return parse_with_reference(format, text, clock())


def parse_journal_date(text: str) -> date:
    """
    Parse the journal's absolute date syntax.

    Raises:
        ValueError: Not in journal date syntax
        InvalidCalendarDateError: Syntax fine, but the date does not exist
    """
    match = JOURNAL_DATE_RE.fullmatch(text.strip())
    if match is None:
        raise ValueError(f"{text!r} is not a journal date")

    partial = PartialDate(
        day=int(match.group("day")),
        month=int(match.group("month")),
        year=int(match.group("year")),
    )
    if not 1 <= partial.month <= 12 or not 1 <= partial.day <= 31:
        raise InvalidCalendarDateError(partial.year, partial.month, partial.day)
    return complete_date(partial, date.max)


def parse_with_journal_fallback(
    format: CompiledFormat,
    text: str,
    reference: date,
) -> tuple[date, bool]:
    """
    Parse with the configured format, falling back to journal date syntax.

    Returns:
        (resolved_date, read_as_journal_date)

    Raises:
        LedgerDatesError: Neither syntax works. The error from the
            configured format is raised, since that is the syntax the
            user was prompted for.
    """
    try:
        return parse_with_reference(format, text, reference), False
    except LedgerDatesError as format_error:
        try:
            return parse_journal_date(text), True
        except (ValueError, LedgerDatesError):
            raise format_error from None


def parse_date_or_journal_date(
    format: CompiledFormat,
    text: str,
    reference: date,
) -> date:
    """Parse with the configured format or, failing that, as a journal date."""
    resolved, _ = parse_with_journal_fallback(format, text, reference)
    return resolved
