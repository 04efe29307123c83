"""
Two-Stage Template Validation

DESIGN DECISION: Validation of a date template happens in two stages:

STAGE 1 - SYNTAX:
- Balanced brackets
- Known field markers
- No repeated date component
- This is exactly what compile_format() enforces

STAGE 2 - SEMANTICS:
- Can the input shapes the template allows be completed to a date?
- Does the template carry day, month and year, so printed dates
  read back unchanged?
- This catches templates that compile but are useless or lossy

IMPORTANT: Validation NEVER rewrites the template.
It reports issues for the operator to fix.
"""

from typing import Optional

from ledger_dates.formats.compiler import compile_format
from ledger_dates.formats.errors import (
    DuplicateFieldError,
    FormatError,
    UnknownFieldError,
)
from ledger_dates.models.date_format import (
    COMPLETABLE_SHAPES,
    CompiledFormat,
    DateComponent,
    DateField,
    FormatValidationResult,
    ValidationIssue,
)


_COMPONENT_ORDER = (DateComponent.DAY, DateComponent.MONTH, DateComponent.YEAR)


def _describe_shape(shape: frozenset[DateComponent]) -> str:
    names = [c.value for c in _COMPONENT_ORDER if c in shape]
    return " + ".join(names) if names else "no fields"


class FormatValidator:
    """
    Validates a date template through a two-stage pipeline.

    Stage 1: Syntax (compilation)
    Stage 2: Semantics (completable shapes, field coverage)
    """

    def _validate_syntax(
        self,
        template: str,
    ) -> tuple[Optional[CompiledFormat], list[ValidationIssue]]:
        """
        Stage 1: Try to compile the template.

        Returns: (compiled_format_or_None, list_of_issues)
        """
        try:
            return compile_format(template), []
        except FormatError as e:
            if isinstance(e, UnknownFieldError):
                fix = "Use %d (day), %m (month), %y (two-digit year) or %Y (full year)"
            elif isinstance(e, DuplicateFieldError):
                fix = "Keep a single field for each of day, month and year"
            else:
                fix = "Check that every '[' has a matching ']' at the end of the template"
            return None, [ValidationIssue(
                field="template",
                issue_type="syntax",
                message=str(e),
                severity="error",
                suggested_fix=fix,
            )]

    def _validate_semantic(
        self,
        compiled: CompiledFormat,
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 2: Semantic validation.

        Checks:
        - Every place the input may stop yields a completable shape
        - Day, month and year are all present
        - Short years are flagged with how they are read

        Returns: (is_valid, list_of_issues)
        """
        issues = []

        reported = set()
        completable = False
        for index, shape in enumerate(compiled.stopping_shapes()):
            if shape in COMPLETABLE_SHAPES:
                completable = True
                continue
            if shape in reported:
                continue
            reported.add(shape)
            issues.append(ValidationIssue(
                field="segments",
                issue_type="unreachable_shape",
                message=(
                    f"Input ending after segment {index} supplies "
                    f"{_describe_shape(shape)}, which cannot be completed to a date"
                ),
                severity="warning",
                suggested_fix="Put the day first, then the month, then the year",
            ))

        if not completable:
            issues.append(ValidationIssue(
                field="segments",
                issue_type="no_completable_shape",
                message="No input accepted by this template can be completed to a date",
                severity="error",
                suggested_fix="Include a %d field in the mandatory part of the template",
            ))

        for component in _COMPONENT_ORDER:
            if component not in compiled.components:
                issues.append(ValidationIssue(
                    field=component.value,
                    issue_type="missing_field",
                    message=(
                        f"Template has no {component.value} field; "
                        "printed dates will not read back unchanged"
                    ),
                    severity="warning",
                    suggested_fix=f"Add a {component.value} field",
                ))

        if DateField.SHORT_YEAR in compiled.fields:
            issues.append(ValidationIssue(
                field="year",
                issue_type="short_year",
                message=(
                    "Two-digit years are read as 20yy; dates outside "
                    "2000-2099 are printed with four digits"
                ),
                severity="info",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)

        return is_valid, issues

    def validate(self, template: str) -> FormatValidationResult:
        """
        Run full two-stage validation pipeline.

        Args:
            template: The date template to check

        Returns:
            FormatValidationResult with all issues found
        """
        all_issues = []

        # Stage 1: Syntax
        compiled, syntax_issues = self._validate_syntax(template)
        all_issues.extend(syntax_issues)
        syntax_valid = compiled is not None

        # Only run stage 2 if stage 1 passes
        semantic_valid = False
        round_trips = False
        if compiled is not None:
            semantic_valid, semantic_issues = self._validate_semantic(compiled)
            all_issues.extend(semantic_issues)
            round_trips = semantic_valid and compiled.components == frozenset(_COMPONENT_ORDER)

        warnings = [issue.message for issue in all_issues if issue.severity == "warning"]

        return FormatValidationResult(
            template=template,
            syntax_valid=syntax_valid,
            semantic_valid=semantic_valid,
            is_valid=syntax_valid and semantic_valid,
            round_trips=round_trips,
            issues=all_issues,
            warnings=warnings,
        )

    def get_user_friendly_summary(
        self,
        result: FormatValidationResult,
    ) -> str:
        """Generate a summary of validation results for the operator."""
        if result.is_valid and not result.warnings:
            return f"✅ Date format {result.template!r} is valid."

        lines = []

        if result.has_errors:
            lines.append(f"❌ Date format {result.template!r} cannot be used:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"     💡 {issue.suggested_fix}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Please check the following:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
