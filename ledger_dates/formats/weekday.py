"""Weekday resolution relative to a reference date."""

from datetime import date, timedelta

from ledger_dates.formats.errors import NoValidDateError


def most_recent_weekday(iso_weekday: int, reference: date) -> date:
    """
    Return the latest date on or before reference with the given ISO weekday.

    Args:
        iso_weekday: 1 (Monday) to 7 (Sunday)
        reference: The date to search back from

    Raises:
        ValueError: iso_weekday is outside 1-7
        NoValidDateError: The weekday would fall before date.min
    """
    if not 1 <= iso_weekday <= 7:
        raise ValueError(f"ISO weekday must be between 1 and 7, got {iso_weekday}")

    offset = (reference.isoweekday() - iso_weekday) % 7
    try:
        return reference - timedelta(days=offset)
    except OverflowError:
        raise NoValidDateError(
            f"No weekday {iso_weekday} on or before {reference.isoformat()}"
        ) from None
