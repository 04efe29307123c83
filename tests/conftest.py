"""Shared fixtures for Ledger Dates tests."""

from datetime import date

import pytest

from ledger_dates.audit import AuditLogger
from ledger_dates.config import get_settings
from ledger_dates.formats import compile_format
from ledger_dates.models.date_format import GERMAN_FORMAT
from ledger_dates.orchestrator import DateEntryFlow


class RecordingLogger:
    """Stands in for a structlog logger and remembers every call."""

    def __init__(self):
        self.records: list[tuple[str, str, dict]] = []

    def _record(self, level, event, **kwargs):
        self.records.append((level, event, kwargs))

    def debug(self, event, **kwargs):
        self._record("debug", event, **kwargs)

    def info(self, event, **kwargs):
        self._record("info", event, **kwargs)

    def warning(self, event, **kwargs):
        self._record("warning", event, **kwargs)

    def error(self, event, **kwargs):
        self._record("error", event, **kwargs)

    @property
    def event_types(self) -> list[str]:
        return [kwargs["event_type"] for _, _, kwargs in self.records]


@pytest.fixture
def german():
    return compile_format(GERMAN_FORMAT)


@pytest.fixture
def recorder():
    return RecordingLogger()


@pytest.fixture
def flow(german, recorder):
    return DateEntryFlow(
        german,
        clock=lambda: date(2016, 9, 20),
        audit_logger=AuditLogger(logger=recorder),
    )


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """Keep every test away from the real environment and .env files."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "LEDGER_DATES_DATE_FORMAT",
        "LEDGER_DATES_JOURNAL_DATE_FALLBACK",
        "LEDGER_DATES_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
