# =============================================
# File: tests/conftest.py
# Purpose: Shared fixtures: scripted randomness, temp store, offline-only app client
# =============================================
import sys, os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import pytest


class ScriptedRandom:
    """Random source that replays a fixed list of draws and counts how many were used."""
    def __init__(self, draws):
        self._draws = list(draws)
        self.calls = 0

    def random(self) -> float:
        if self.calls >= len(self._draws):
            raise AssertionError(f"scripted random exhausted after {self.calls} draws")
        v = self._draws[self.calls]
        self.calls += 1
        return v


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def catalog():
    from daily_concept.utils.catalog import load_default_catalog
    return load_default_catalog()


@pytest.fixture
def store(tmp_path):
    from daily_concept.db.store import KeyValueStore
    return KeyValueStore(str(tmp_path / "store.json"))


@pytest.fixture
def offline_env(monkeypatch):
    """Mock generation on, no simulated delay."""
    monkeypatch.setenv("USE_MOCK_GENERATION", "true")
    monkeypatch.setenv("MOCK_DELAY_MIN_SECONDS", "0")
    monkeypatch.setenv("MOCK_DELAY_MAX_SECONDS", "0")
    monkeypatch.setenv("LOG_FILE", "")


@pytest.fixture
def make_client(store, monkeypatch):
    """Factory for a TestClient over a fresh app bound to the temp store."""
    monkeypatch.setenv("LOG_FILE", "")
    from fastapi.testclient import TestClient
    from daily_concept.main import create_app
    from daily_concept.utils.metrics import reset as metrics_reset

    def _make(**kwargs):
        metrics_reset()
        kwargs.setdefault("store", store)
        return TestClient(create_app(**kwargs))

    return _make
