# =============================================
# File: tests/test_logging.py
# Purpose: One structured JSON line per request, with router context and request id
# =============================================
import sys, os, json
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from daily_concept.utils import slog


def _find_json_events(caplog, name: str):
    out = []
    for rec in caplog.records:
        try:
            data = json.loads(rec.message)
        except ValueError:
            continue
        if isinstance(data, dict) and data.get("event") == name:
            out.append(data)
    return out


def test_structured_log_on_generate(make_client, offline_env, caplog):
    caplog.set_level("INFO", logger="daily_concept")
    client = make_client()

    r = client.post("/generate", json={"topic": "Entropy", "depth": "light",
                                       "context": {"date": "2026-01-26"}})
    assert r.status_code == 200

    events = _find_json_events(caplog, "request.completed")
    assert events
    evt = events[-1]
    assert evt["path"] == "/generate"
    assert evt["status"] == 200
    assert isinstance(evt["latency_ms"], int)
    assert evt["request_id"] == r.headers["X-Request-ID"]
    assert evt["generation_source"] == "offline"
    assert evt["fallback"] is False
    # the topic itself is hashed, never logged raw
    assert evt["thash"] == slog.thash("Entropy")
    assert "Entropy" not in json.dumps(evt)


def test_structured_log_on_failed_generation(make_client, caplog):
    from daily_concept.services.generation import ContentGenerator
    from daily_concept.utils.config import GenerationConfig
    from daily_concept.utils.errors import ProviderTimeout

    class SlowProvider:
        name = "slow"

        async def fetch(self, req):
            raise ProviderTimeout("late")

    caplog.set_level("INFO", logger="daily_concept")
    gen = ContentGenerator(provider=SlowProvider(), config=GenerationConfig(production=True))
    client = make_client(generator=gen)

    r = client.post("/generate", json={"topic": "Entropy", "context": {"date": "2026-01-26"}})
    assert r.status_code == 502

    evt = _find_json_events(caplog, "request.completed")[-1]
    assert evt["status"] == 502
    assert evt["generation_failed"] is True


def test_request_ids_are_unique(make_client):
    client = make_client()
    ids = {client.get("/health").headers["X-Request-ID"] for _ in range(5)}
    assert len(ids) == 5


def test_thash_normalizes_case_and_spacing():
    assert slog.thash("  Quantum   computing ") == slog.thash("quantum computing")
    assert len(slog.thash("x")) == 10


def test_raw_topic_fields_are_dropped_and_level_follows_status(caplog):
    caplog.set_level("INFO", logger="daily_concept")
    slog.finalize_request_log("rid", "POST", "/teach", 502, 3, None, ctx={"query": "secret text", "status": 200})

    rec = caplog.records[-1]
    assert rec.levelname == "ERROR"
    data = json.loads(rec.message)
    assert "query" not in data
    # router context cannot overwrite the real status
    assert data["status"] == 502
