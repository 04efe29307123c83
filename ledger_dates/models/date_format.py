"""
Core Data Models for Ledger Dates

These models define the shapes flowing through the date-entry pipeline:

1. DateField        - the atomic field kinds a template can contain
2. Segment          - one bracket-nesting level of a compiled template
3. CompiledFormat   - the immutable chain of segments built from a template
4. PartialDate      - what the matcher extracted from the user's text

DESIGN DECISION: Everything produced by the compiler is frozen.
A CompiledFormat is built once at startup and then shared read-only
by every parse and print call, so nothing downstream may mutate it.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class DateComponent(str, Enum):
    """The calendar component a field fills in."""
    DAY = "day"
    MONTH = "month"
    YEAR = "year"


class DateField(str, Enum):
    """
    Field markers understood by the template language.

    %d -> DAY, %m -> MONTH, %y -> SHORT_YEAR, %Y -> LONG_YEAR

    SHORT_YEAR and LONG_YEAR both fill the year component, so a
    template may contain only one of them.
    """
    DAY = "day"
    MONTH = "month"
    SHORT_YEAR = "short_year"
    LONG_YEAR = "long_year"

    @property
    def component(self) -> DateComponent:
        if self is DateField.DAY:
            return DateComponent.DAY
        if self is DateField.MONTH:
            return DateComponent.MONTH
        return DateComponent.YEAR

    @property
    def max_width(self) -> int:
        """Maximum number of digits the field consumes on input."""
        return 4 if self.component is DateComponent.YEAR else 2

    @property
    def valid_range(self) -> tuple[int, int]:
        """Inclusive numeric range accepted for this field."""
        return _FIELD_RANGES[self.component]


# Years are bounded by what datetime.date can represent.
_FIELD_RANGES = {
    DateComponent.DAY: (1, 31),
    DateComponent.MONTH: (1, 12),
    DateComponent.YEAR: (1, 9999),
}

FIELD_MARKERS = {
    "d": DateField.DAY,
    "m": DateField.MONTH,
    "y": DateField.SHORT_YEAR,
    "Y": DateField.LONG_YEAR,
}

GERMAN_FORMAT = "%d[.[%m[.[%y]]]]"


# =============================================================================
# COMPILED FORMAT
# =============================================================================

class LiteralAtom(BaseModel):
    """A run of characters matched verbatim and printed verbatim."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["literal"] = "literal"
    text: str = Field(..., min_length=1)


class FieldAtom(BaseModel):
    """A single date field inside a segment."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["field"] = "field"
    field: DateField


Atom = Annotated[Union[LiteralAtom, FieldAtom], Field(discriminator="kind")]


class Segment(BaseModel):
    """
    One nesting level of a template.

    Segment 0 is mandatory. Segment i (i >= 1) is the content of the
    optional group that trails segment i-1, up to the next nested group.
    """
    model_config = ConfigDict(frozen=True)

    atoms: tuple[Atom, ...] = ()

    @property
    def fields(self) -> tuple[DateField, ...]:
        return tuple(atom.field for atom in self.atoms if isinstance(atom, FieldAtom))


class CompiledFormat(BaseModel):
    """
    A template compiled into an ordered chain of segments.

    Only a prefix S0..Sk of the chain can ever be present in the input,
    which is what limits the shapes a PartialDate can take.
    """
    model_config = ConfigDict(frozen=True)

    template: str
    segments: tuple[Segment, ...] = Field(..., min_length=1)

    @property
    def fields(self) -> tuple[DateField, ...]:
        return tuple(f for segment in self.segments for f in segment.fields)

    @property
    def components(self) -> frozenset[DateComponent]:
        return frozenset(f.component for f in self.fields)

    def stopping_shapes(self) -> list[frozenset[DateComponent]]:
        """
        Component sets the input can supply, one per segment boundary.

        Entry k is the set of components present when the input stops
        right after segment k.
        """
        shapes = []
        seen: set[DateComponent] = set()
        for segment in self.segments:
            seen.update(f.component for f in segment.fields)
            shapes.append(frozenset(seen))
        return shapes

    def __str__(self) -> str:
        return self.template


# =============================================================================
# MATCH RESULTS
# =============================================================================

class PartialDate(BaseModel):
    """
    Field assignment produced by matching user input.

    Only the components the user actually typed are set. Completion
    against a reference date fills in the rest.
    """
    model_config = ConfigDict(frozen=True)

    day: Optional[int] = None
    month: Optional[int] = None
    year: Optional[int] = None

    @property
    def shape(self) -> frozenset[DateComponent]:
        """The set of components present."""
        present = set()
        if self.day is not None:
            present.add(DateComponent.DAY)
        if self.month is not None:
            present.add(DateComponent.MONTH)
        if self.year is not None:
            present.add(DateComponent.YEAR)
        return frozenset(present)


COMPLETABLE_SHAPES = (
    frozenset({DateComponent.DAY}),
    frozenset({DateComponent.DAY, DateComponent.MONTH}),
    frozenset({DateComponent.DAY, DateComponent.MONTH, DateComponent.YEAR}),
)


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single issue found while validating a template."""

    field: str = Field(
        ...,
        description="Part of the template the issue is about (e.g. 'template', 'year')"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'syntax', 'missing_field', 'unreachable_shape')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class FormatValidationResult(BaseModel):
    """
    Result of the two-stage template validation.

    Stage 1: Syntax (does the template compile?)
    Stage 2: Semantics (can every accepted input be completed and printed back?)
    """

    template: str

    syntax_valid: bool = Field(
        ...,
        description="Did the template compile?"
    )
    semantic_valid: bool = Field(
        ...,
        description="Is at least one input shape completable?"
    )
    is_valid: bool = Field(
        ...,
        description="Overall validation result"
    )
    round_trips: bool = Field(
        default=False,
        description="Do printed dates always parse back to the same date?"
    )

    issues: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "error")
