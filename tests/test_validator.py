"""Tests for the two-stage template validator."""

import pytest

from ledger_dates.models.date_format import GERMAN_FORMAT
from ledger_dates.validation import FormatValidator


@pytest.fixture
def validator():
    return FormatValidator()


def issue_types(result):
    return [issue.issue_type for issue in result.issues]


class TestSyntaxStage:
    """Stage 1: the template must compile."""

    def test_unknown_marker(self, validator):
        result = validator.validate("%d.%q")
        assert result.syntax_valid is False
        assert result.semantic_valid is False
        assert result.is_valid is False
        assert issue_types(result) == ["syntax"]
        assert "%d (day)" in result.issues[0].suggested_fix

    def test_duplicate_field(self, validator):
        result = validator.validate("%d.%d")
        assert result.has_errors
        assert "single field" in result.issues[0].suggested_fix

    def test_unbalanced_brackets(self, validator):
        result = validator.validate("%d[.%m")
        assert result.error_count == 1
        assert "'['" in result.issues[0].suggested_fix


class TestSemanticStage:
    """Stage 2: what the compiled template can actually do."""

    def test_german_format(self, validator):
        result = validator.validate(GERMAN_FORMAT)
        assert result.is_valid is True
        assert result.round_trips is True
        assert result.warnings == []
        assert issue_types(result) == ["short_year"]

    def test_long_year_format_has_no_issues(self, validator):
        result = validator.validate("%Y-%m-%d")
        assert result.is_valid is True
        assert result.issues == []

    def test_unreachable_shape_is_a_warning(self, validator):
        result = validator.validate("%m[/%d]")
        assert result.is_valid is True
        assert result.round_trips is False
        assert issue_types(result) == ["unreachable_shape", "missing_field"]
        assert "segment 0 supplies month" in result.warnings[0]

    def test_unreachable_shape_reported_once(self, validator):
        result = validator.validate("%m[-[%d]]")
        assert issue_types(result).count("unreachable_shape") == 1

    def test_nothing_completable(self, validator):
        result = validator.validate("%m")
        assert result.syntax_valid is True
        assert result.semantic_valid is False
        assert result.is_valid is False
        assert "no_completable_shape" in issue_types(result)

    def test_empty_template(self, validator):
        result = validator.validate("")
        assert result.is_valid is False
        assert "no fields" in result.warnings[0]
        assert issue_types(result).count("missing_field") == 3


class TestUserFriendlySummary:
    """Tests for get_user_friendly_summary()."""

    def test_valid(self, validator):
        summary = validator.get_user_friendly_summary(validator.validate(GERMAN_FORMAT))
        assert summary == f"✅ Date format {GERMAN_FORMAT!r} is valid."

    def test_errors_with_fixes(self, validator):
        summary = validator.get_user_friendly_summary(validator.validate("%d.%q"))
        assert summary.startswith("❌")
        assert "💡" in summary

    def test_warnings_only(self, validator):
        summary = validator.get_user_friendly_summary(validator.validate("%m[/%d]"))
        assert summary.startswith("⚠️ Please check the following:")
        assert "❌" not in summary
