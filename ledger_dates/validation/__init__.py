"""Template validation package."""

from ledger_dates.validation.validator import FormatValidator

__all__ = ["FormatValidator"]
