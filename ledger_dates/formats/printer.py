"""
Date Printer

Renders a date in a CompiledFormat. Every segment is printed, since
the date is fully known.

CRITICAL: Printing must be invertible. For every format F and date D:

    parse_with_reference(F, print_date(F, D), D) == D

A two-digit year is ambiguous across centuries, so a %y field is
first printed short and then checked by parsing the full output back
with D as the reference. If that does not reproduce D, the year is
printed with four digits instead, which the matcher reads as a
literal year in the %y position.

%Y is always printed zero-padded to four digits (year 5 prints as
"0005"), so every printed year has the same width and a long-year
field never shrinks when the template has no separator after it.
The matcher reads "0005" back as year 5.
"""

from datetime import date

from ledger_dates.formats.errors import LedgerDatesError
from ledger_dates.formats.parser import parse_with_reference
from ledger_dates.models.date_format import CompiledFormat, DateField, FieldAtom


def _render(format: CompiledFormat, value: date, short_year: bool) -> str:
    parts = []
    for segment in format.segments:
        for atom in segment.atoms:
            if not isinstance(atom, FieldAtom):
                parts.append(atom.text)
            elif atom.field is DateField.DAY:
                parts.append(f"{value.day:02d}")
            elif atom.field is DateField.MONTH:
                parts.append(f"{value.month:02d}")
            elif atom.field is DateField.SHORT_YEAR and short_year:
                parts.append(f"{value.year % 100:02d}")
            else:
                parts.append(f"{value.year:04d}")
    return "".join(parts)


def round_trips(format: CompiledFormat, text: str, value: date) -> bool:
    """Check whether text parses back to value when value is the reference."""
    try:
        return parse_with_reference(format, text, value) == value
    except LedgerDatesError:
        return False


def short_year_fits(format: CompiledFormat, value: date) -> bool:
    """Whether a two-digit year reads back as value.year in this format."""
    return round_trips(format, _render(format, value, short_year=True), value)


def print_date(format: CompiledFormat, value: date) -> str:
    """
    Render value using the format.

    Day and month are zero-padded to two digits, %Y to four. %y uses
    two digits when that reads back unambiguously and four otherwise.
    """
    if DateField.SHORT_YEAR not in format.fields:
        return _render(format, value, short_year=False)

    return _render(format, value, short_year=short_year_fits(format, value))
