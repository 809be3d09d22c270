"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import datetime, timezone
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from adapters.json_store import JsonTimeSheetStore  # noqa: E402
from core.domain.models import Period  # noqa: E402


def utc(*args) -> datetime:
    """Aware UTC datetime shortcut: utc(2024, 6, 15, 8)."""
    return datetime(*args, tzinfo=timezone.utc)


def period(start: datetime, end: datetime) -> Period:
    return Period(start=start, end=end)


@pytest.fixture
def berlin():
    return ZoneInfo("Europe/Berlin")


@pytest.fixture
def azores():
    """EU DST rules at UTC-1: the local midnight itself is skipped/repeated."""
    return ZoneInfo("Atlantic/Azores")


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "timesheet.json"


@pytest.fixture
def store(data_file):
    return JsonTimeSheetStore(data_file)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep real user config and env vars out of the tests."""
    for name in ("WORKTIME_DATA_FILE", "WORKTIME_TIMEZONE", "WORKTIME_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)
