# =============================================
# File: tests/test_generate_endpoint.py
# Purpose: /generate and /validate over HTTP: offline mode, fallback, 502 and 422 mapping
# =============================================
import sys, os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from daily_concept.services.generation import ContentGenerator
from daily_concept.utils.config import GenerationConfig
from daily_concept.utils.errors import USER_FACING_GENERATION_ERROR, ProviderError
from daily_concept.utils.offline_content import create_offline_content

PAYLOAD = {
    "topic": "  Quantum Computing ",
    "depth": "light",
    "userInterests": ["Technology"],
    "context": {"date": "2026-01-26", "locale": "en-US"},
}


class BrokenProvider:
    name = "broken"

    async def fetch(self, req):
        raise ProviderError("upstream stack trace with secrets")


def _generator(production=False, use_mock=False):
    return ContentGenerator(
        provider=BrokenProvider(),
        config=GenerationConfig(use_mock=use_mock, production=production,
                                mock_delay_min_s=0.0, mock_delay_max_s=0.0),
    )


def test_generate_offline_mode(make_client, offline_env):
    client = make_client()
    r = client.post("/generate", json=PAYLOAD)
    assert r.status_code == 200
    body = r.json()
    assert body == create_offline_content("Quantum Computing", "light").to_wire()
    assert body["reflectionQuestion"].endswith("?")


def test_generate_falls_back_outside_production(make_client):
    client = make_client(generator=_generator(production=False))
    r = client.post("/generate", json=PAYLOAD)
    assert r.status_code == 200
    assert r.json()["topic"] == "Quantum Computing"


def test_generate_production_failure_is_generic_502(make_client):
    client = make_client(generator=_generator(production=True))
    r = client.post("/generate", json=PAYLOAD)
    assert r.status_code == 502
    assert r.json() == {"detail": USER_FACING_GENERATION_ERROR}
    assert "secrets" not in r.text


def test_generate_rejects_bad_requests(make_client, offline_env):
    client = make_client()
    assert client.post("/generate", json=dict(PAYLOAD, topic="   ")).status_code == 422
    assert client.post("/generate", json=dict(PAYLOAD, depth="deep")).status_code == 422
    assert client.post("/generate", json={"depth": "light"}).status_code == 422


def test_validate_lists_every_violation(make_client):
    client = make_client()
    candidate = {
        "topic": "Entropy",
        "teaser": "x" * 141,
        "eli7": "   ",
        "deeper": "d",
        "example": "e",
        "whyItMatters": "w",
        "reflectionQuestion": "No question mark",
    }
    r = client.post("/validate", json=candidate)
    assert r.status_code == 422
    detail = r.json()["detail"]
    assert detail["violations"] == [
        "Missing or invalid eli7",
        "Teaser exceeds 140 characters",
        "Reflection question must end with ?",
    ]
    assert detail["message"].startswith("Content validation failed: ")


def test_validate_accepts_good_content(make_client):
    client = make_client()
    good = create_offline_content("Entropy").to_wire()
    r = client.post("/validate", json=good)
    assert r.status_code == 200
    assert r.json() == good
