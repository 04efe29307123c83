"""
Template Compiler

Turns a template such as "%d[.[%m[.[%y]]]]" into a CompiledFormat.

Grammar:
    template := atom*
    atom     := literal | field | "[" atom* "]"
    field    := "%d" | "%m" | "%y" | "%Y"
    literal  := any character except '%', '[' and ']'

DESIGN DECISION: Every '[' opens a new segment, and an optional group
must be the last thing inside its parent. That keeps the result a flat
chain S0, S1, S2, ... instead of a tree: entering segment i implies
segment i-1 was entered, so only a prefix of the chain is ever present
in the input.

    "%d[.[%m[.[%y]]]]"  ->  S0={%d}  S1={"."}  S2={%m}  S3={"."}  S4={%y}
"""

from ledger_dates.formats.errors import (
    DuplicateFieldError,
    FormatSyntaxError,
    UnknownFieldError,
)
from ledger_dates.models.date_format import (
    FIELD_MARKERS,
    CompiledFormat,
    DateComponent,
    FieldAtom,
    LiteralAtom,
    Segment,
)


def compile_format(template: str) -> CompiledFormat:
    """
    Compile a template string.

    Args:
        template: The template, e.g. "%d[.[%m[.[%y]]]]"

    Returns:
        The compiled, immutable format

    Raises:
        FormatSyntaxError: Unbalanced brackets, a dangling '%', or
            content following a closed optional group
        UnknownFieldError: A '%x' marker other than %d, %m, %y, %Y
        DuplicateFieldError: Day, month or year given twice
    """
    segments: list[list] = [[]]
    literal: list[str] = []
    open_brackets: list[int] = []
    seen: set[DateComponent] = set()
    closed = False

    def flush_literal() -> None:
        if literal:
            segments[-1].append(LiteralAtom(text="".join(literal)))
            literal.clear()

    def reject_after_group(position: int) -> None:
        if closed:
            raise FormatSyntaxError(
                "Nothing may follow an optional group except ']'", template, position
            )

    i = 0
    while i < len(template):
        char = template[i]

        if char == "%":
            if i + 1 >= len(template):
                raise FormatSyntaxError("Dangling '%' at end of template", template, i)
            reject_after_group(i)
            marker = template[i + 1]
            field = FIELD_MARKERS.get(marker)
            if field is None:
                raise UnknownFieldError(marker, template, i)
            if field.component in seen:
                raise DuplicateFieldError(field.component.value, template, i)
            seen.add(field.component)
            flush_literal()
            segments[-1].append(FieldAtom(field=field))
            i += 2
            continue

        if char == "[":
            reject_after_group(i)
            flush_literal()
            open_brackets.append(i)
            segments.append([])
        elif char == "]":
            if not open_brackets:
                raise FormatSyntaxError("Unmatched ']'", template, i)
            flush_literal()
            open_brackets.pop()
            closed = True
        else:
            reject_after_group(i)
            literal.append(char)
        i += 1

    if open_brackets:
        raise FormatSyntaxError("Unclosed '['", template, open_brackets[-1])

    flush_literal()
    return CompiledFormat(
        template=template,
        segments=tuple(Segment(atoms=tuple(atoms)) for atoms in segments),
    )
