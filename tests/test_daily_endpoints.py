# =============================================
# File: tests/test_daily_endpoints.py
# Purpose: Today / teach / entries / preferences endpoints against a temp store
# =============================================
import sys, os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import random

import pytest


@pytest.fixture
def client(make_client, offline_env):
    c = make_client(rng=random.Random(21))
    r = c.put("/preferences", json={"selectedInterests": ["Science", "History"], "depth": "light",
                                    "hasCompletedOnboarding": True})
    assert r.status_code == 200
    return c


def test_preferences_round_trip(client):
    prefs = client.get("/preferences").json()
    assert prefs["selectedInterests"] == ["Science", "History"]
    assert prefs["depth"] == "light"
    assert prefs["audioEnabled"] is True
    assert prefs["hasCompletedOnboarding"] is True


def test_today_is_stable_for_a_date(client):
    first = client.get("/today", params={"date": "2026-01-26"}).json()
    second = client.get("/today", params={"date": "2026-01-26"}).json()
    assert first == second
    assert first["dateKey"] == "2026-01-26"
    assert first["entryId"] is None
    assert client.get("/today", params={"date": "26/01/2026"}).status_code == 422


def test_alternatives_then_select(client):
    today = client.get("/today", params={"date": "2026-01-26"}).json()
    alts = client.post("/today/alternatives", json={"date": "2026-01-26"}).json()["alternatives"]
    assert len(alts) == 2
    assert today["topic"] not in [a["topic"] for a in alts]

    r = client.post("/today/select", json={"date": "2026-01-26", "choice": alts[1]})
    assert r.status_code == 200
    assert client.get("/today", params={"date": "2026-01-26"}).json()["topic"] == alts[1]["topic"]


def test_teach_today_creates_linked_entry(client):
    r = client.post("/today/teach", json={"date": "2026-01-26"})
    assert r.status_code == 200
    entry = r.json()
    assert entry["source"] == "dailyRecommendation"
    assert entry["reflectionQuestion"].endswith("?")

    today = client.get("/today", params={"date": "2026-01-26"}).json()
    assert today["entryId"] == entry["id"]
    assert client.get(f"/entries/{entry['id']}").json()["topic"] == today["topic"]


def test_teach_query_and_history(client):
    r = client.post("/teach", json={"query": "  Plato's   Cave "})
    assert r.status_code == 200
    entry = r.json()
    assert entry["topic"] == "Plato's Cave"
    assert entry["source"] == "userQuery"

    assert [e["id"] for e in client.get("/entries").json()] == [entry["id"]]
    assert len(client.get("/entries", params={"q": "plato"}).json()) == 1
    assert client.get("/entries", params={"q": "nothing-like-this"}).json() == []

    fav = client.post(f"/entries/{entry['id']}/favorite", json={"favorite": True})
    assert fav.status_code == 200 and fav.json()["isFavorite"] is True


def test_teach_query_validation(client):
    assert client.post("/teach", json={"query": "   "}).status_code == 422
    # nothing but an injection cue: cleans down to an empty topic
    assert client.post("/teach", json={"query": "Act as  jailbreak"}).status_code == 422


def test_unknown_entry_is_404(client):
    assert client.get("/entries/nope").status_code == 404
    assert client.post("/entries/nope/favorite", json={}).status_code == 404


def test_delete_data_clears_everything(client):
    client.post("/teach", json={"query": "Stoicism"})
    assert client.delete("/data").json() == {"status": "cleared"}
    assert client.get("/entries").json() == []
    assert client.get("/preferences").json()["selectedInterests"] == []
