"""HistoryService and StorageService tests."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from modules.codec.base64_codec import CodecMode
from modules.services.history_service import HistoryEntry, HistoryService, format_timestamp
from modules.services.storage_service import StorageService, StorageUnavailableError

KEY = "base64_playground"
BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class UnavailableStorage(StorageService):
    """Storage whose medium always refuses access."""

    def __init__(self) -> None:
        super().__init__(Path("unavailable"))

    def get_item(self, key: str):
        raise StorageUnavailableError("disabled")

    def set_item(self, key: str, value: str) -> None:
        raise StorageUnavailableError("quota exceeded")

    def remove_item(self, key: str) -> None:
        raise StorageUnavailableError("disabled")


def make_entry(number: int, mode: CodecMode = CodecMode.ENCODE) -> HistoryEntry:
    return HistoryEntry(
        mode=mode,
        input=f"input-{number}",
        output=f"output-{number}",
        timestamp=BASE_TIME + timedelta(minutes=number),
    )


@pytest.fixture()
def storage(tmp_path):
    return StorageService(tmp_path)


@pytest.fixture()
def history(storage):
    return HistoryService(storage, key=KEY, capacity=10)


def test_load_without_slot_is_empty(history):
    assert history.load() == []


@pytest.mark.parametrize("raw", ["", "   ", "{not json", '{"mode": "encode"}', "42", "null"])
def test_load_treats_bad_content_as_empty(storage, history, raw):
    storage.set_item(KEY, raw)
    assert history.load() == []


def test_append_persists_wire_format(storage, history):
    history.append(make_entry(1))

    stored = json.loads(storage.get_item(KEY))
    assert stored == [
        {
            "mode": "encode",
            "input": "input-1",
            "output": "output-1",
            "date": "2024-05-01T12:01:00.000Z",
        }
    ]


def test_append_is_newest_first_and_bounded(storage, history):
    for number in range(11):
        history.append(make_entry(number))

    entries = history.load()
    assert len(entries) == 10
    assert [entry.input for entry in entries] == [f"input-{n}" for n in range(10, 0, -1)]
    assert len(json.loads(storage.get_item(KEY))) == 10


def test_append_at_capacity_evicts_only_oldest(history):
    for number in range(10):
        history.append(make_entry(number))
    before = history.load()

    history.append(make_entry(99))
    after = history.load()

    assert len(after) == 10
    assert after[0].input == "input-99"
    assert after[1:] == before[:-1]


def test_clear_then_load_is_empty(storage, history):
    history.append(make_entry(1))
    history.clear()

    assert history.load() == []
    assert storage.get_item(KEY) is None


def test_load_skips_invalid_entries_and_truncates(storage):
    payload = [
        {"mode": "decode", "input": "aGk=", "output": "hi", "date": "2024-05-01T12:00:00.000Z"},
        {"mode": "rot13", "input": "x", "output": "k", "date": "2024-05-01T12:00:00.000Z"},
        {"mode": "encode", "input": "", "output": "", "date": "2024-05-01T12:00:00.000Z"},
        "garbage",
        {"mode": "encode", "input": "a", "output": "YQ==", "date": "not a date"},
    ]
    storage.set_item(KEY, json.dumps(payload))
    history = HistoryService(storage, key=KEY, capacity=1)

    entries = history.load()

    assert len(entries) == 1
    assert entries[0].mode is CodecMode.DECODE
    assert entries[0].timestamp == BASE_TIME


def test_unparseable_date_is_kept_without_timestamp(storage, history):
    storage.set_item(KEY, json.dumps([{"mode": "encode", "input": "a", "output": "YQ==", "date": "?"}]))

    entries = history.load()

    assert entries[0].timestamp is None


def test_unavailable_storage_degrades_to_session_history():
    history = HistoryService(UnavailableStorage(), key=KEY, capacity=10)

    history.append(make_entry(1))
    assert [entry.input for entry in history.load()] == ["input-1"]

    history.clear()
    assert history.load() == []


def test_storage_rejects_unsafe_keys(storage):
    with pytest.raises(ValueError):
        storage.get_item("../escape")


def test_format_timestamp_treats_naive_as_utc():
    assert format_timestamp(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05.000Z"


def test_capacity_must_be_positive(storage):
    with pytest.raises(ValueError):
        HistoryService(storage, key=KEY, capacity=0)
