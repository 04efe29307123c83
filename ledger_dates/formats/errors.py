"""
Error taxonomy for the date-format pipeline.

Three families, one per stage:

- FormatError: the template itself is broken. Fatal at startup,
  surfaced to whoever wrote the template.
- ParseError: the user's text does not fit the template (yet).
  Recoverable per keystroke; the caller re-prompts.
- DateError: the text fits, but names no valid calendar date.
  Recoverable; shown as a validation message.

The pure functions never catch these themselves. Every failure is
raised to the caller, who decides how to present it.
"""

from typing import Optional


class LedgerDatesError(Exception):
    """Base exception for all date-format errors."""
    pass


# =============================================================================
# TEMPLATE COMPILATION
# =============================================================================

class FormatError(LedgerDatesError):
    """The template could not be compiled."""

    def __init__(self, message: str, template: str, position: Optional[int] = None):
        self.template = template
        self.position = position
        if position is not None:
            message = f"{message} (at position {position} in {template!r})"
        super().__init__(message)


class FormatSyntaxError(FormatError):
    """Unbalanced brackets, dangling '%' or content after an optional group."""
    pass


class UnknownFieldError(FormatError):
    """A '%x' marker that is not one of %d, %m, %y, %Y."""

    def __init__(self, marker: str, template: str, position: int):
        self.marker = marker
        super().__init__(f"Unknown field marker '%{marker}'", template, position)


class DuplicateFieldError(FormatError):
    """A date component appears more than once in the template."""

    def __init__(self, component: str, template: str, position: int):
        self.component = component
        super().__init__(f"Field for {component} appears more than once", template, position)


class UnusableFormatError(FormatError):
    """The template compiles, but no input it accepts can be completed to a date."""

    def __init__(self, template: str, reasons: list[str]):
        self.reasons = reasons
        super().__init__(f"Date format cannot be used: {'; '.join(reasons)}", template)


# =============================================================================
# INPUT MATCHING
# =============================================================================

class ParseError(LedgerDatesError):
    """User input does not match the template."""

    def __init__(self, message: str, text: str, position: int):
        self.text = text
        self.position = position
        super().__init__(message)


class MalformedInputError(ParseError):
    """A segment was entered but did not match completely."""
    pass


class TrailingInputError(ParseError):
    """Input continues after the last segment of the template."""

    def __init__(self, text: str, position: int):
        super().__init__(
            f"Unexpected trailing input {text[position:]!r}", text, position
        )


# =============================================================================
# DATE COMPLETION
# =============================================================================

class DateError(LedgerDatesError):
    """The matched fields do not name a usable calendar date."""
    pass


class InvalidCalendarDateError(DateError):
    """A fully specified date that does not exist (e.g. 31.04.2016)."""

    def __init__(self, year: int, month: int, day: int):
        self.year = year
        self.month = month
        self.day = day
        super().__init__(f"{day:02d}.{month:02d}.{year:04d} is not a valid date")


class NoValidDateError(DateError):
    """No date on or before the reference fits the given fields."""
    pass
