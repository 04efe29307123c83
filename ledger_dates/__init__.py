"""
Ledger Dates - Source Package

Human-friendly date entry for a journal-based accounting tool.
A small template language ("%d[.[%m[.[%y]]]]") describes which parts
of a date the user may leave out; missing parts are filled in from a
reference date, looking backwards.

DESIGN PRINCIPLES:
1. Templates are compiled once and never change afterwards
2. Completion always looks into the past, never the future
3. Whatever is printed must parse back to the same date
4. The core is pure; "today" is always passed in
5. Failures are raised, never silently corrected
"""

from ledger_dates.formats import (
    compile_format,
    most_recent_weekday,
    parse_date_or_journal_date,
    parse_date_with_today,
    parse_with_reference,
    print_date,
)
from ledger_dates.models.date_format import GERMAN_FORMAT

__version__ = "1.0.0"
__author__ = "Ledger Dates Team"

__all__ = [
    "GERMAN_FORMAT",
    "compile_format",
    "most_recent_weekday",
    "parse_date_or_journal_date",
    "parse_date_with_today",
    "parse_with_reference",
    "print_date",
]
