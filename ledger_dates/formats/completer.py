"""
Date Completer

Fills in the fields the user did not type, relative to a reference date.

Three input shapes are completable:

- day + month + year: taken as-is (future dates allowed), only
  checked for calendar validity
- day + month: the most recent year in which that day exists and
  is not after the reference
- day: the most recent month in which that day exists and is not
  after the reference

DESIGN DECISION: The backward search is generate-and-test over a
bounded, lazy sequence of candidate dates. The bounds are explicit:

- Leap years recur at most 8 years apart, so 9 candidate years
  always reach a 29th of February.
- Every month is followed or preceded by a 31-day month within two
  steps, so 12 candidate months are far more than ever needed.

Running out of candidates (or running past year 1) is reported as
NoValidDateError instead of looping.
"""

import calendar
from collections.abc import Iterable, Iterator
from datetime import MAXYEAR, MINYEAR, date

from ledger_dates.formats.errors import InvalidCalendarDateError, NoValidDateError
from ledger_dates.models.date_format import COMPLETABLE_SHAPES, PartialDate


MAX_CANDIDATE_YEARS = 9
MAX_CANDIDATE_MONTHS = 12

DAY_ONLY, DAY_MONTH, FULL_DATE = COMPLETABLE_SHAPES


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def candidate_years(reference: date) -> Iterator[int]:
    """Years to try when only the year is missing, newest first."""
    stop = max(MINYEAR - 1, reference.year - MAX_CANDIDATE_YEARS)
    yield from range(reference.year, stop, -1)


def candidate_months(reference: date) -> Iterator[tuple[int, int]]:
    """(year, month) pairs to try when month and year are missing, newest first."""
    year, month = reference.year, reference.month
    for _ in range(MAX_CANDIDATE_MONTHS):
        if year < MINYEAR:
            return
        yield year, month
        year, month = (year - 1, 12) if month == 1 else (year, month - 1)


def _first_not_after(candidates: Iterable[date], reference: date) -> date:
    for candidate in candidates:
        if candidate <= reference:
            return candidate
    raise NoValidDateError(f"No matching date on or before {reference.isoformat()}")


def complete_date(partial: PartialDate, reference: date) -> date:
    """
    Complete a partial date.

    Args:
        partial: Fields extracted from the user's input
        reference: The date ambiguity is resolved against (usually today)

    Returns:
        A valid calendar date

    Raises:
        InvalidCalendarDateError: Day, month and year were all given
            but do not form a real date
        NoValidDateError: The shape is not completable, a field is out
            of range, or no candidate date exists
    """
    shape = partial.shape
    if shape not in COMPLETABLE_SHAPES:
        present = ", ".join(sorted(c.value for c in shape)) or "nothing"
        raise NoValidDateError(f"Cannot complete a date from {present}")

    day = partial.day
    month = partial.month
    if not 1 <= day <= 31:
        raise NoValidDateError(f"Day {day} is outside 1-31")
    if month is not None and not 1 <= month <= 12:
        raise NoValidDateError(f"Month {month} is outside 1-12")

    if shape == FULL_DATE:
        year = partial.year
        if not (MINYEAR <= year <= MAXYEAR) or day > days_in_month(year, month):
            raise InvalidCalendarDateError(year, month, day)
        return date(year, month, day)

    if shape == DAY_MONTH:
        candidates = (
            date(year, month, day)
            for year in candidate_years(reference)
            if day <= days_in_month(year, month)
        )
    else:
        candidates = (
            date(year, month_, day)
            for year, month_ in candidate_months(reference)
            if day <= days_in_month(year, month_)
        )

    return _first_not_after(candidates, reference)
