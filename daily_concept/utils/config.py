# =============================================
# File: daily_concept/utils/config.py
# Purpose: Environment-driven settings, read at call time so tests/env overrides take effect
# =============================================
from __future__ import annotations
import os
from dataclasses import dataclass

_TRUE = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class GenerationConfig:
    use_mock: bool = False
    production: bool = False
    provider: str = "http"
    api_base_url: str = "http://localhost:8787"
    timeout_s: float = 30.0
    mock_delay_min_s: float = 1.0
    mock_delay_max_s: float = 2.0
    llm_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.7


def load_generation_config() -> GenerationConfig:
    return GenerationConfig(
        use_mock=_env_bool("USE_MOCK_GENERATION", False),
        production=os.getenv("APP_ENV", "development").strip().lower() == "production",
        provider=os.getenv("CONTENT_PROVIDER", "http").strip().lower() or "http",
        api_base_url=os.getenv("CONTENT_API_BASE_URL", "http://localhost:8787").rstrip("/"),
        timeout_s=max(0.001, _env_float("GENERATION_TIMEOUT_SECONDS", 30.0)),
        mock_delay_min_s=max(0.0, _env_float("MOCK_DELAY_MIN_SECONDS", 1.0)),
        mock_delay_max_s=max(0.0, _env_float("MOCK_DELAY_MAX_SECONDS", 2.0)),
        llm_model=os.getenv("LLM_MODEL", "gpt-4o-mini"),
        llm_temperature=_env_float("LLM_TEMPERATURE", 0.7),
    )


def storage_path() -> str:
    """JSON store location; relative to the working directory unless STORAGE_PATH is set."""
    return os.getenv("STORAGE_PATH") or os.path.join("data", "store.json")
