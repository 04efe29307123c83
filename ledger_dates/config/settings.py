"""
Configuration Management for Ledger Dates

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: The date format is validated by compiling it while the
settings load. A broken template is an operator error and should stop
the program at startup, not on the first keystroke.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ledger_dates.formats.compiler import compile_format
from ledger_dates.formats.errors import FormatError
from ledger_dates.models.date_format import GERMAN_FORMAT, CompiledFormat


class DateSettings(BaseSettings):
    """Date entry configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_DATES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    date_format: str = Field(
        default=GERMAN_FORMAT,
        description="Template for entering and printing dates, e.g. %d[.[%m[.[%y]]]]"
    )
    journal_date_fallback: bool = Field(
        default=True,
        description="Also accept journal dates (YYYY-MM-DD) when the format does not match"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR)$",
        description="Minimum level for structured log output"
    )

    @field_validator('date_format')
    @classmethod
    def validate_date_format(cls, v: str) -> str:
        """Reject templates that do not compile."""
        try:
            compile_format(v)
        except FormatError as e:
            raise ValueError(str(e)) from e
        return v

    @property
    def compiled_format(self) -> CompiledFormat:
        return compile_format(self.date_format)


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def dates(self) -> DateSettings:
        return DateSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, object]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error with the message for invalid ones.
    Useful for startup checks.
    """
    results: dict[str, object] = {}

    settings = get_settings()

    try:
        _ = settings.dates
        results["dates"] = True
    except Exception as e:
        results["dates"] = False
        results["dates_error"] = str(e)

    return results
