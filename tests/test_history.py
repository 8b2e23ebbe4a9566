from __future__ import annotations

import json

import pytest

from qrgen.config import AppConfig
from qrgen.history import HistoryEntry, HistoryStore, format_entry


def make_entry(content: str = "https://example.com") -> HistoryEntry:
    return HistoryEntry(
        content=content,
        format="png",
        size=256,
        fg_color="#000000",
        bg_color="#FFFFFF",
        output_path="/tmp/qrcode.png",
    )


def test_missing_file_starts_empty(tmp_path):
    store = HistoryStore(tmp_path / "history.json")

    assert store.list() == []
    assert len(store) == 0


def test_add_assigns_increasing_ids_newest_first(tmp_path):
    store = HistoryStore(tmp_path / "history.json")

    first = store.add(make_entry("one"))
    second = store.add(make_entry("two"))

    assert (first.id, second.id) == (1, 2)
    assert [entry.content for entry in store.list()] == ["two", "one"]


def test_entries_survive_reload(tmp_path):
    path = tmp_path / "nested" / "history.json"
    HistoryStore(path).add(make_entry("persisted"))

    reloaded = HistoryStore(path)

    entry = reloaded.get(1)
    assert entry.content == "persisted"
    assert entry.created_at.tzinfo is not None
    assert json.loads(path.read_text(encoding="utf-8"))[0]["id"] == 1


def test_history_is_trimmed_to_limit(tmp_path):
    store = HistoryStore(tmp_path / "history.json", AppConfig(history_max_entries=3))

    for index in range(5):
        store.add(make_entry(f"entry {index}"))

    assert [entry.id for entry in store.list()] == [5, 4, 3]


def test_default_limit_is_fifty(tmp_path):
    store = HistoryStore(tmp_path / "history.json")
    for index in range(55):
        store.add(make_entry(str(index)))

    assert len(store) == 50
    assert store.list()[0].id == 55


def test_get_unknown_id_raises_lookup_error(tmp_path):
    store = HistoryStore(tmp_path / "history.json")

    with pytest.raises(LookupError) as excinfo:
        store.get(7)

    assert str(excinfo.value) == "entry #7 not found"


def test_corrupt_file_starts_empty(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("{not json", encoding="utf-8")

    store = HistoryStore(path)

    assert store.list() == []
    assert store.add(make_entry()).id == 1


def test_clear_removes_everything(tmp_path):
    path = tmp_path / "history.json"
    store = HistoryStore(path)
    store.add(make_entry())

    store.clear()

    assert HistoryStore(path).list() == []


def test_default_location_follows_config_dir(config_home):
    store = HistoryStore()

    assert store.path == config_home / "history.json"


def test_format_table_lists_entries(tmp_path):
    store = HistoryStore(tmp_path / "history.json")
    assert store.format_table() == "No QR codes generated yet."

    store.add(make_entry("line one\nline two"))
    table = store.format_table().splitlines()

    assert table[0].startswith("ID")
    assert table[1].startswith("#1 ")
    assert "line one line two" in table[1]
    assert "PNG  256x256" in format_entry(store.get(1))
