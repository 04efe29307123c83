"""Date format compiler, matcher, completer and printer."""

from ledger_dates.formats.compiler import compile_format
from ledger_dates.formats.completer import (
    candidate_months,
    candidate_years,
    complete_date,
    days_in_month,
)
from ledger_dates.formats.errors import (
    DateError,
    DuplicateFieldError,
    FormatError,
    FormatSyntaxError,
    InvalidCalendarDateError,
    LedgerDatesError,
    MalformedInputError,
    NoValidDateError,
    ParseError,
    TrailingInputError,
    UnknownFieldError,
    UnusableFormatError,
)
from ledger_dates.formats.matcher import match_segments
from ledger_dates.formats.parser import (
    Clock,
    parse_date_or_journal_date,
    parse_date_with_today,
    parse_journal_date,
    parse_with_journal_fallback,
    parse_with_reference,
)
from ledger_dates.formats.printer import print_date, round_trips, short_year_fits
from ledger_dates.formats.weekday import most_recent_weekday

__all__ = [
    # Pipeline
    "Clock",
    "candidate_months",
    "candidate_years",
    "compile_format",
    "complete_date",
    "days_in_month",
    "match_segments",
    "most_recent_weekday",
    "parse_date_or_journal_date",
    "parse_date_with_today",
    "parse_journal_date",
    "parse_with_journal_fallback",
    "parse_with_reference",
    "print_date",
    "round_trips",
    "short_year_fits",
    # Errors
    "DateError",
    "DuplicateFieldError",
    "FormatError",
    "FormatSyntaxError",
    "InvalidCalendarDateError",
    "LedgerDatesError",
    "MalformedInputError",
    "NoValidDateError",
    "ParseError",
    "TrailingInputError",
    "UnknownFieldError",
    "UnusableFormatError",
]
