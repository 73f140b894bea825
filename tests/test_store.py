# =============================================
# File: tests/test_store.py
# Purpose: JSON key-value store: preferences, today topic, entries, rolling recent list
# =============================================
import sys, os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import pytest

from daily_concept.db.models import TodayTopic, TopicEntry, UserPreferences
from daily_concept.db.store import KeyValueStore
from daily_concept.utils.offline_content import create_offline_content


def _entry(i, topic):
    return TopicEntry.from_content(f"id-{i}", create_offline_content(topic, "light"), source="userQuery")


def test_defaults_when_empty(store):
    prefs = store.get_preferences()
    assert prefs.selected_interests == []
    assert prefs.depth == "normal"
    assert prefs.audio_enabled is True
    assert store.get_today_topic("2026-01-26") is None
    assert store.get_entries() == []
    assert store.get_last_14_topics() == []


def test_values_survive_a_reload(store):
    store.set_preferences(UserPreferences(selected_interests=["Art"], depth="light"))
    store.set_today_topic("2026-01-26", TodayTopic(date_key="2026-01-26", topic="Cubism", teaser="t", category="Art"))
    store.add_entry(_entry(1, "Cubism"))

    again = KeyValueStore(store.path)
    assert again.get_preferences().selected_interests == ["Art"]
    assert again.get_today_topic("2026-01-26").topic == "Cubism"
    assert again.get_entry("id-1").topic == "Cubism"


def test_file_uses_camelcase_keys(store):
    store.set_preferences(UserPreferences(selected_interests=["Art"]))
    with open(store.path, encoding="utf-8") as f:
        raw = f.read()
    assert '"selectedInterests"' in raw
    assert '"user_preferences"' in raw


def test_entries_are_most_recent_first_and_recent_list_is_capped(store):
    for i in range(16):
        store.add_entry(_entry(i, f"Topic {i}"))
    # re-learning a topic moves it to the front instead of duplicating it
    store.add_entry(_entry(99, "Topic 10"))

    assert store.get_entries()[0].id == "id-99"
    recent = store.get_last_14_topics()
    assert len(recent) == 14
    assert recent[0] == "Topic 10"
    assert recent.count("Topic 10") == 1
    assert "Topic 0" not in recent


def test_update_search_and_clear(store):
    store.add_entry(_entry(1, "Stoicism"))
    store.add_entry(_entry(2, "Blockchain"))

    updated = store.update_entry("id-1", is_favorite=True)
    assert updated.is_favorite is True
    assert store.get_entry("id-1").is_favorite is True
    assert store.update_entry("missing", is_favorite=True) is None

    assert [e.id for e in store.search_entries("stoic")] == ["id-1"]
    assert len(store.search_entries("")) == 2

    store.clear_all()
    assert store.get_entries() == []
    assert store.get_last_14_topics() == []


def test_corrupt_file_reads_as_empty(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")
    assert KeyValueStore(str(path)).get_entries() == []


def test_failed_write_leaves_memory_and_disk_unchanged(store, monkeypatch):
    import daily_concept.db.store as store_mod

    store.add_entry(_entry(1, "Stoicism"))

    def _disk_full(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(store_mod.os, "replace", _disk_full)
    with pytest.raises(OSError):
        store.add_entry(_entry(2, "Entropy"))
    with pytest.raises(OSError):
        store.set_preferences(UserPreferences(selected_interests=["Art"]))
    with pytest.raises(OSError):
        store.clear_all()

    assert [e.id for e in store.get_entries()] == ["id-1"]
    assert store.get_last_14_topics() == ["Stoicism"]
    assert store.get_preferences().selected_interests == []

    monkeypatch.undo()
    again = KeyValueStore(store.path)
    assert [e.id for e in again.get_entries()] == ["id-1"]


def test_storage_path_defaults_to_working_directory(monkeypatch):
    from daily_concept.utils.config import storage_path

    monkeypatch.delenv("STORAGE_PATH", raising=False)
    assert storage_path() == os.path.join("data", "store.json")
    assert not os.path.isabs(storage_path())
    monkeypatch.setenv("STORAGE_PATH", "/tmp/elsewhere.json")
    assert storage_path() == "/tmp/elsewhere.json"
