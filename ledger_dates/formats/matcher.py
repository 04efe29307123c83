"""
Segment Matcher

Matches user text against a CompiledFormat, segment by segment.

Rules:
1. Segment 0 is mandatory and must match completely.
2. A later segment is only attempted if input remains at its boundary.
   Once attempted it must match completely: optionality is all-or-nothing
   per segment, never per atom.
3. Input left over after the last segment is an error.

Matching runs in two passes:

- The whole format is compiled into one anchored pattern, the optional
  segments as nested optional groups. Each field only accepts in-range
  values, so adjacent fields without a separator ("%y%m%d" against
  "150201") split wherever the digits form a valid date. Two-digit
  fields and short years are tried before wider readings.
- If that fails, the segments are walked again with plain digit runs
  to find where the input went wrong and report it.
"""

import re
from functools import lru_cache

from ledger_dates.formats.errors import MalformedInputError, TrailingInputError
from ledger_dates.models.date_format import (
    FIELD_MARKERS,
    CompiledFormat,
    DateComponent,
    DateField,
    FieldAtom,
    PartialDate,
    Segment,
)


SHORT_YEAR_BASE = 2000


def _positive_digits(width: int) -> str:
    """Alternation matching exactly `width` digits with a value of at least 1."""
    alternatives = []
    for zeros in range(width):
        rest = width - zeros - 1
        alternatives.append("0" * zeros + "[1-9]" + (f"[0-9]{{{rest}}}" if rest else ""))
    return "|".join(alternatives)


_FIELD_PATTERNS = {
    DateField.DAY: "0[1-9]|[12][0-9]|3[01]|[1-9]",
    DateField.MONTH: "0[1-9]|1[0-2]|[1-9]",
    DateField.SHORT_YEAR: "|".join(
        ["[0-9]{2}", "[0-9]", _positive_digits(4), _positive_digits(3)]
    ),
    DateField.LONG_YEAR: "|".join(_positive_digits(width) for width in (4, 3, 2, 1)),
}


def _segment_regex(segment: Segment, strict: bool) -> str:
    parts = []
    for atom in segment.atoms:
        if isinstance(atom, FieldAtom):
            if strict:
                digits = _FIELD_PATTERNS[atom.field]
            else:
                digits = f"[0-9]{{1,{atom.field.max_width}}}"
            parts.append(f"(?P<{atom.field.component.value}>{digits})")
        else:
            parts.append(re.escape(atom.text))
    return "".join(parts)


@lru_cache(maxsize=256)
def _segment_pattern(segment: Segment) -> re.Pattern:
    return re.compile(_segment_regex(segment, strict=False))


@lru_cache(maxsize=64)
def _format_pattern(format: CompiledFormat) -> re.Pattern:
    head, *rest = format.segments
    tail = ""
    for segment in reversed(rest):
        tail = f"(?:{_segment_regex(segment, strict=True)}{tail})?"
    return re.compile(_segment_regex(head, strict=True) + tail)


def _field_value(field: DateField, digits: str) -> int:
    value = int(digits)
    # One or two digits in a short-year slot mean 20yy; anything wider
    # is a literal year, which is how the printer writes years it
    # cannot shorten.
    if field is DateField.SHORT_YEAR and len(digits) <= 2:
        value += SHORT_YEAR_BASE
    return value


def match_segments(format: CompiledFormat, text: str) -> PartialDate:
    """
    Extract the fields the user typed.

    Args:
        format: The compiled template
        text: Raw user input

    Returns:
        PartialDate holding only the components present in the input

    Raises:
        MalformedInputError: A segment was entered but did not match,
            or a field value is out of range
        TrailingInputError: Input continues past the last segment
    """
    match = _format_pattern(format).fullmatch(text)
    if match is None:
        return _walk_segments(format, text)

    values = {
        field.component.value: _field_value(field, match.group(field.component.value))
        for field in format.fields
        if match.group(field.component.value) is not None
    }
    return PartialDate(
        day=values.get(DateComponent.DAY.value),
        month=values.get(DateComponent.MONTH.value),
        year=values.get(DateComponent.YEAR.value),
    )


def _walk_segments(format: CompiledFormat, text: str) -> PartialDate:
    """Match greedily segment by segment, raising at the first failure."""
    values: dict[str, int] = {}
    position = 0

    for index, segment in enumerate(format.segments):
        if index > 0 and position == len(text):
            break

        match = _segment_pattern(segment).match(text, position)
        if match is None:
            raise MalformedInputError(
                f"Input {text[position:]!r} does not match {_describe(segment)!r}",
                text,
                position,
            )

        for field in segment.fields:
            component = field.component.value
            value = _field_value(field, match.group(component))
            low, high = field.valid_range
            if not low <= value <= high:
                raise MalformedInputError(
                    f"{component.capitalize()} {value} is outside {low}-{high}",
                    text,
                    match.start(component),
                )
            values[component] = value

        position = match.end()

    if position != len(text):
        raise TrailingInputError(text, position)

    return PartialDate(
        day=values.get(DateComponent.DAY.value),
        month=values.get(DateComponent.MONTH.value),
        year=values.get(DateComponent.YEAR.value),
    )


def _describe(segment: Segment) -> str:
    markers = {field: f"%{marker}" for marker, field in FIELD_MARKERS.items()}
    return "".join(
        markers[atom.field] if isinstance(atom, FieldAtom) else atom.text
        for atom in segment.atoms
    )
