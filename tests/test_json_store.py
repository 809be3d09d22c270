import json
from datetime import datetime, timedelta

import pytest

from adapters.json_store import JsonTimeSheetStore, dump_time_sheet, parse_time_sheet
from conftest import period, utc
from core.domain.errors import StorageError
from core.domain.models import TimeSheet
from core.interfaces.storage import TimeSheetStore


def test_store_implements_protocol(store):
    assert isinstance(store, TimeSheetStore)


def test_missing_file_loads_empty(store):
    assert store.load() == TimeSheet()


@pytest.mark.parametrize("content", ["", "   \n"])
def test_empty_file_loads_empty(store, data_file, content):
    data_file.write_text(content, encoding="utf-8")
    assert store.load() == TimeSheet()


@pytest.mark.parametrize(
    "sheet",
    [
        TimeSheet(),
        TimeSheet(active_period_start=utc(2024, 6, 15, 9)),
        TimeSheet(
            periods=[
                period(utc(2024, 6, 15, 8), utc(2024, 6, 15, 9, 30)),
                period(utc(2024, 6, 14, 8), utc(2024, 6, 14, 8, 0, 1, 250000)),
            ]
        ),
        TimeSheet(
            periods=[period(utc(2024, 6, 15, 8), utc(2024, 6, 15, 9))],
            active_period_start=utc(2024, 6, 15, 10),
        ),
    ],
)
def test_round_trip(store, sheet):
    store.save(sheet)
    assert store.load() == sheet


def test_persisted_layout(store, data_file):
    sheet = TimeSheet(periods=[period(utc(2024, 6, 15, 8), utc(2024, 6, 15, 9))])
    assert store.save(sheet) == data_file

    data = json.loads(data_file.read_text(encoding="utf-8"))
    assert set(data) == {"periods", "active_period_start"}
    assert data["active_period_start"] is None
    start = datetime.fromisoformat(data["periods"][0]["start"])
    assert start == utc(2024, 6, 15, 8)
    assert start.utcoffset() == timedelta(0)


def test_save_overwrites_previous_state(store):
    store.save(TimeSheet(active_period_start=utc(2024, 6, 15, 9)))
    store.save(TimeSheet())
    assert store.load() == TimeSheet()


def test_save_creates_parent_directories(tmp_path):
    store = JsonTimeSheetStore(tmp_path / "nested" / "dir" / "sheet.json")
    store.save(TimeSheet())
    assert store.path.exists()


def test_save_leaves_no_temp_files(store, tmp_path):
    store.save(TimeSheet())
    assert [p.name for p in tmp_path.iterdir()] == ["timesheet.json"]


def test_accepts_offset_timestamps_and_extra_keys(store, data_file):
    data_file.write_text(
        json.dumps(
            {
                "periods": [{"start": "2024-06-15T10:00:00+02:00", "end": "2024-06-15T11:00:00+02:00"}],
                "active_period_start": None,
                "comment": "ignored",
            }
        ),
        encoding="utf-8",
    )
    sheet = store.load()
    assert sheet.periods == [period(utc(2024, 6, 15, 8), utc(2024, 6, 15, 9))]


def test_malformed_json_is_an_error(store, data_file):
    data_file.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageError) as excinfo:
        store.load()
    assert excinfo.value.path == data_file


@pytest.mark.parametrize(
    "payload",
    [
        {"periods": [{"start": "yesterday"}]},
        {"periods": [], "active_period_start": "2024-06-15T09:00:00"},  # naive
        {"periods": "nope"},
    ],
)
def test_invalid_schema_is_an_error(store, data_file, payload):
    data_file.write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(StorageError):
        store.load()


def test_unreadable_path_is_an_error(tmp_path):
    with pytest.raises(StorageError):
        JsonTimeSheetStore(tmp_path).load()


def test_unwritable_target_is_an_error(tmp_path):
    target = tmp_path / "taken"
    target.mkdir()
    with pytest.raises(StorageError):
        JsonTimeSheetStore(target).save(TimeSheet())
    assert [p.name for p in tmp_path.iterdir()] == ["taken"]


def test_dump_and_parse_helpers():
    sheet = TimeSheet(active_period_start=utc(2024, 6, 15, 9))
    text = dump_time_sheet(sheet)
    assert text.endswith("\n")
    assert parse_time_sheet(text) == sheet
