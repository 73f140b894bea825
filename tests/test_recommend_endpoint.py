# =============================================
# File: tests/test_recommend_endpoint.py
# Purpose: Catalog browsing + recommendation endpoints
# =============================================
import sys, os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import random


def test_health_and_categories(make_client):
    client = make_client()
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "categories": 13}

    data = client.get("/categories").json()["categories"]
    names = [c["name"] for c in data]
    assert names[0] == "Technology"
    assert all(c["topics"] >= 10 for c in data)
    tech = data[0]
    assert set(tech["related"]) <= set(names)


def test_topics_for_category(make_client):
    client = make_client()
    r = client.get("/categories/Technology/topics")
    assert r.status_code == 200
    body = r.json()
    assert body["category"] == "Technology"
    assert body["topics"][0]["topic"] == "Quantum Computing"
    assert all(len(t["teaser"]) <= 140 for t in body["topics"])

    # unknown category is an empty list, not an error
    r = client.get("/categories/Astrology/topics")
    assert r.status_code == 200
    assert r.json()["topics"] == []


def test_recommend_today_respects_history(make_client):
    client = make_client(rng=random.Random(3))
    recent = ["Quantum Computing", "Neural Networks", "Blockchain"]
    for _ in range(30):
        r = client.post("/recommend/today", json={"interests": ["Technology"], "recentTopics": recent})
        assert r.status_code == 200
        body = r.json()
        assert set(body) == {"topic", "teaser", "category"}
        assert body["topic"] not in recent


def test_recommend_today_cold_start(make_client):
    client = make_client(rng=random.Random(1))
    r = client.post("/recommend/today", json={})
    assert r.status_code == 200
    assert r.json()["category"] in [c["name"] for c in client.get("/categories").json()["categories"]]


def test_recommend_alternatives(make_client):
    client = make_client(rng=random.Random(9))
    r = client.post(
        "/recommend/alternatives",
        json={"currentTopic": "Quantum Computing", "interests": ["Technology", "Science"], "count": 3},
    )
    assert r.status_code == 200
    alts = r.json()["alternatives"]
    assert len(alts) == 3
    topics = [a["topic"] for a in alts]
    assert "Quantum Computing" not in topics
    assert len(set(topics)) == 3


def test_recommend_alternatives_validation(make_client):
    client = make_client()
    assert client.post("/recommend/alternatives", json={"interests": []}).status_code == 422
    r = client.post("/recommend/alternatives", json={"currentTopic": "X", "count": 0})
    assert r.status_code == 422


def test_empty_catalog_is_503(make_client):
    from daily_concept.utils.catalog import Catalog

    client = make_client(catalog=Catalog({}, {}))
    r = client.post("/recommend/today", json={"interests": []})
    assert r.status_code == 503
    assert r.json() == {"detail": "No topics available right now."}
