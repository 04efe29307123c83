"""Tests for the template compiler."""

import pytest
from pydantic import ValidationError

from ledger_dates.formats import (
    DuplicateFieldError,
    FormatError,
    FormatSyntaxError,
    UnknownFieldError,
    compile_format,
)
from ledger_dates.models.date_format import (
    GERMAN_FORMAT,
    DateField,
    FieldAtom,
    LiteralAtom,
    Segment,
)


def day():
    return FieldAtom(field=DateField.DAY)


def month():
    return FieldAtom(field=DateField.MONTH)


def lit(text):
    return LiteralAtom(text=text)


class TestSegmentLayout:
    """Tests for how templates are split into segments."""

    def test_german_format(self):
        """Every '[' opens a new segment."""
        compiled = compile_format(GERMAN_FORMAT)
        assert compiled.segments == (
            Segment(atoms=(day(),)),
            Segment(atoms=(lit("."),)),
            Segment(atoms=(month(),)),
            Segment(atoms=(lit("."),)),
            Segment(atoms=(FieldAtom(field=DateField.SHORT_YEAR),)),
        )

    def test_separator_inside_segment(self):
        compiled = compile_format("%d-[%m-[%y]]")
        assert [segment.fields for segment in compiled.segments] == [
            (DateField.DAY,),
            (DateField.MONTH,),
            (DateField.SHORT_YEAR,),
        ]
        assert compiled.segments[0].atoms == (day(), lit("-"))

    def test_bracket_free_template_is_one_segment(self):
        compiled = compile_format("%Y-%m-%d")
        assert len(compiled.segments) == 1
        assert compiled.fields == (DateField.LONG_YEAR, DateField.MONTH, DateField.DAY)

    def test_literal_runs_are_merged(self):
        compiled = compile_format("on %d of %m")
        assert compiled.segments[0].atoms == (lit("on "), day(), lit(" of "), month())

    def test_empty_template(self):
        compiled = compile_format("")
        assert compiled.segments == (Segment(),)
        assert compiled.fields == ()

    def test_template_is_kept(self):
        assert str(compile_format(GERMAN_FORMAT)) == GERMAN_FORMAT


class TestCompiledFormatImmutability:
    """Compiled formats are shared, so they must not change."""

    def test_cannot_reassign_segments(self):
        compiled = compile_format(GERMAN_FORMAT)
        with pytest.raises(ValidationError):
            compiled.segments = ()

    def test_equal_templates_compile_equal(self):
        assert compile_format(GERMAN_FORMAT) == compile_format(GERMAN_FORMAT)
        assert hash(compile_format(GERMAN_FORMAT)) == hash(compile_format(GERMAN_FORMAT))


class TestCompileErrors:
    """Tests for FormatError subclasses."""

    @pytest.mark.parametrize("template", ["%d[.%m", "%d[.[%m]", "[%d"])
    def test_unclosed_bracket(self, template):
        with pytest.raises(FormatSyntaxError, match="Unclosed"):
            compile_format(template)

    @pytest.mark.parametrize("template", ["%d]", "%d[.%m]]"])
    def test_unmatched_closing_bracket(self, template):
        with pytest.raises(FormatSyntaxError, match="Unmatched"):
            compile_format(template)

    def test_dangling_percent(self):
        with pytest.raises(FormatSyntaxError, match="Dangling"):
            compile_format("%d.%")

    @pytest.mark.parametrize("template", ["%d[.%m].x", "[%d][%m]", "[%d]%m"])
    def test_content_after_group(self, template):
        with pytest.raises(FormatSyntaxError, match="optional group"):
            compile_format(template)

    def test_unknown_field(self):
        with pytest.raises(UnknownFieldError) as excinfo:
            compile_format("%d.%x")
        assert excinfo.value.marker == "x"
        assert excinfo.value.position == 3
        assert excinfo.value.template == "%d.%x"

    def test_percent_literal_is_unknown(self):
        with pytest.raises(UnknownFieldError):
            compile_format("%d%%")

    def test_duplicate_field(self):
        with pytest.raises(DuplicateFieldError) as excinfo:
            compile_format("%d.[%d]")
        assert excinfo.value.component == "day"

    def test_short_and_long_year_are_duplicates(self):
        with pytest.raises(DuplicateFieldError, match="year"):
            compile_format("%y-[%Y]")

    def test_all_are_format_errors(self):
        for template in ["%d[", "%q", "%m%m"]:
            with pytest.raises(FormatError):
                compile_format(template)
