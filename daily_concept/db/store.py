# =============================================
# File: daily_concept/db/store.py
# Purpose: Key-value persistence collaborator backed by a JSON file
# =============================================
from __future__ import annotations
import json
import os
import threading
from typing import Any, Dict, List, Optional

from loguru import logger

from .models import TodayTopic, TopicEntry, UserPreferences

RECENT_TOPICS_CAP = 14

KEY_PREFERENCES = "user_preferences"
KEY_TODAY_PREFIX = "today_topic_"
KEY_ENTRIES = "topic_entries"
KEY_LAST_TOPICS = "last_14_topics"


class KeyValueStore:
    """
    Small key -> JSON value store:
    - user_preferences: UserPreferences
    - today_topic_<YYYY-MM-DD>: TodayTopic
    - topic_entries: list[TopicEntry], most recent first
    - last_14_topics: list[str], most recent first, de-duplicated
    Persistence: one JSON file written atomically (tmp + replace). A missing or
    corrupt file reads as an empty store.
    """
    def __init__(self, path: str, recent_cap: int = RECENT_TOPICS_CAP) -> None:
        self._path = path
        self._lock = threading.Lock()
        self._mem: Dict[str, Any] = {}
        self._recent_cap = recent_cap
        self._load()

    @property
    def path(self) -> str:
        return self._path

    def _load(self) -> None:
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self._mem = data if isinstance(data, dict) else {}
        except FileNotFoundError:
            self._mem = {}
        except (OSError, ValueError) as e:
            logger.warning(f"[store] unreadable store at {self._path}, starting empty: {e}")
            self._mem = {}

    def _commit(self, mem: Dict[str, Any]) -> None:
        """Write `mem` to disk, then make it the in-memory state. A failed write changes nothing."""
        folder = os.path.dirname(self._path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        tmp = self._path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(mem, f, ensure_ascii=False, indent=2)
        os.replace(tmp, self._path)
        self._mem = mem

    # ---- preferences ----
    def get_preferences(self) -> UserPreferences:
        with self._lock:
            raw = self._mem.get(KEY_PREFERENCES)
        if not raw:
            return UserPreferences()
        return UserPreferences.model_validate(raw)

    def set_preferences(self, prefs: UserPreferences) -> None:
        with self._lock:
            self._commit({**self._mem, KEY_PREFERENCES: prefs.model_dump(by_alias=True)})

    # ---- today's topic ----
    def get_today_topic(self, date_key: str) -> Optional[TodayTopic]:
        with self._lock:
            raw = self._mem.get(KEY_TODAY_PREFIX + date_key)
        return TodayTopic.model_validate(raw) if raw else None

    def set_today_topic(self, date_key: str, topic: TodayTopic) -> None:
        with self._lock:
            self._commit({**self._mem, KEY_TODAY_PREFIX + date_key: topic.model_dump(by_alias=True)})

    # ---- entries ----
    def _entries_raw(self) -> List[Dict[str, Any]]:
        return list(self._mem.get(KEY_ENTRIES) or [])

    def get_entries(self) -> List[TopicEntry]:
        with self._lock:
            raw = self._entries_raw()
        return [TopicEntry.model_validate(e) for e in raw]

    def get_entry(self, entry_id: str) -> Optional[TopicEntry]:
        for e in self.get_entries():
            if e.id == entry_id:
                return e
        return None

    def add_entry(self, entry: TopicEntry) -> None:
        with self._lock:
            entries = self._entries_raw()
            entries.insert(0, entry.model_dump(by_alias=True))
            self._commit({**self._mem, KEY_ENTRIES: entries, KEY_LAST_TOPICS: self._recent_with(entry.topic)})

    def update_entry(self, entry_id: str, **changes: Any) -> Optional[TopicEntry]:
        """Apply field changes (python names) to one entry; None when the id is unknown."""
        with self._lock:
            entries = self._entries_raw()
            for i, raw in enumerate(entries):
                if raw.get("id") != entry_id:
                    continue
                updated = TopicEntry.model_validate(raw).model_copy(update=changes)
                entries[i] = updated.model_dump(by_alias=True)
                self._commit({**self._mem, KEY_ENTRIES: entries})
                return updated
        return None

    def search_entries(self, query: str) -> List[TopicEntry]:
        q = (query or "").lower()
        return [e for e in self.get_entries() if q in e.topic.lower() or q in e.teaser.lower()]

    # ---- rolling recent topics ----
    def _recent_with(self, topic: str) -> List[str]:
        recent = [t for t in (self._mem.get(KEY_LAST_TOPICS) or []) if t != topic]
        return [topic] + recent[: self._recent_cap - 1]

    def get_last_14_topics(self) -> List[str]:
        with self._lock:
            return list(self._mem.get(KEY_LAST_TOPICS) or [])[: self._recent_cap]

    def clear_all(self) -> None:
        with self._lock:
            self._commit({})
