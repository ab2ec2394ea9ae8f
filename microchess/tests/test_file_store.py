"""
Tests for the size-bounded game log.

Goal: after trim the store fits its budget, eviction is oldest-first,
and a failed persist never damages the previous file.
"""

import json
import logging
import os
import tempfile

import pytest

from microchess.core.canonical import store_json_bytes
from microchess.core.errors import PersistError
from microchess.log import GameLogStore
from microchess.log import file_store as file_store_module

from .conftest import entry_of_size


def _naive_trim(entries, max_bytes):
    """Reference: re-serialize after every eviction."""
    entries = list(entries)
    while len(store_json_bytes(entries)) > max_bytes and len(entries) > 1:
        entries.pop(0)
    return entries


def test_load_missing_file_is_empty():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = GameLogStore(os.path.join(tmpdir, "games.json"))

        assert store.load() == []
        assert len(store) == 0


def test_load_unparseable_file_warns_and_starts_fresh(caplog):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "games.json")
        with open(path, "w") as f:
            f.write("{not json")
        store = GameLogStore(path)

        with caplog.at_level(logging.WARNING):
            assert store.load() == []

        assert any("Starting fresh" in r.getMessage() for r in caplog.records)


def test_load_non_array_is_empty():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "games.json")
        with open(path, "w") as f:
            json.dump({"seed": "x"}, f)

        assert GameLogStore(path).load() == []


def test_load_discards_non_object_entries():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "games.json")
        with open(path, "w") as f:
            json.dump([{"seed": "a"}, 7, "x", {"seed": "b"}], f)
        store = GameLogStore(path)

        assert store.load() == [{"seed": "a"}, {"seed": "b"}]


def test_persist_then_load_round_trip():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "nested", "games.json")
        store = GameLogStore(path)
        store.append({"seed": "a", "pgn": "1. e4 *"})
        store.append({"seed": "b", "pgn": "1. d4 *"})
        store.persist()

        reloaded = GameLogStore(path)
        reloaded.load()

        assert reloaded.entries == store.entries


def test_persisted_format_indented_with_trailing_newline():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "games.json")
        store = GameLogStore(path)
        store.append({"seed": "a"})
        store.persist()

        with open(path, "rb") as f:
            raw = f.read()

        assert raw == b'[\n  {\n    "seed": "a"\n  }\n]\n'
        assert len(raw) - 1 == store.serialized_size()


def test_persist_leaves_no_temp_files():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "games.json")
        store = GameLogStore(path)
        for i in range(5):
            store.append({"seed": str(i)})
            store.persist()

        assert os.listdir(tmpdir) == ["games.json"]


def test_trim_example_1024_bytes():
    """Entries of 500 bytes against a 1024-byte budget: third append evicts the first."""
    store = GameLogStore("unused.json", max_bytes=1024)

    store.append(entry_of_size(0))
    assert store.trim() == 0
    store.append(entry_of_size(1))
    assert store.trim() == 0
    assert store.serialized_size() == 1010

    store.append(entry_of_size(2))
    assert store.trim() == 1

    assert [e["seed"] for e in store.entries] == ["seed-1", "seed-2"]
    assert store.serialized_size() == 1010


@pytest.mark.parametrize("max_bytes", [2, 300, 1024, 5000, 10 ** 6])
def test_trim_matches_reserialization(max_bytes):
    """Incremental byte accounting must agree with a full re-serialization."""
    entries = [entry_of_size(i, target=200 + 37 * i) for i in range(25)]
    entries.append({"seed": "ünïcødé", "final_fen": "♔♕", "pgn": "😀" * 10})
    store = GameLogStore("unused.json", max_bytes=max_bytes)
    for e in entries:
        store.append(e)

    store.trim()

    expected = _naive_trim(entries, max_bytes)
    assert list(store.entries) == expected
    assert store.serialized_size() <= max_bytes or len(store) == 1


def test_trim_keeps_single_oversized_entry(caplog):
    store = GameLogStore("unused.json", max_bytes=100)
    store.append(entry_of_size(0))
    store.append(entry_of_size(1))

    with caplog.at_level(logging.WARNING):
        evicted = store.trim()

    assert evicted == 1
    assert [e["seed"] for e in store.entries] == ["seed-1"]
    assert any("exceeds budget" in r.getMessage() for r in caplog.records)


def test_persist_retries_with_linear_backoff(monkeypatch):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "games.json")
        calls = []
        sleeps = []
        real_write = file_store_module.atomic_write_text

        def flaky_write(p, text):
            calls.append(p)
            if len(calls) < 3:
                raise OSError("disk busy")
            real_write(p, text)

        monkeypatch.setattr(file_store_module, "atomic_write_text", flaky_write)
        store = GameLogStore(path, max_write_retries=3, sleep=sleeps.append)
        store.append({"seed": "a"})

        store.persist()

        assert len(calls) == 3
        assert sleeps == pytest.approx([0.1, 0.2])
        with open(path) as f:
            assert json.load(f) == [{"seed": "a"}]


def test_persist_exhaustion_keeps_previous_file(monkeypatch):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "games.json")
        store = GameLogStore(path, sleep=lambda _: None)
        store.append({"seed": "old"})
        store.persist()
        with open(path, "rb") as f:
            before = f.read()

        def failing_write(p, text):
            raise OSError("read-only file system")

        monkeypatch.setattr(file_store_module, "atomic_write_text", failing_write)
        store.append({"seed": "new"})

        with pytest.raises(PersistError):
            store.persist()

        with open(path, "rb") as f:
            assert f.read() == before
