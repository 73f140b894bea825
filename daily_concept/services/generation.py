# =============================================
# File: daily_concept/services/generation.py
# Purpose: Content generation: provider call with timeout, validation, offline fallback
# =============================================
from __future__ import annotations
import asyncio
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from loguru import logger

from ..utils.config import GenerationConfig, load_generation_config
from ..utils.content_contract import GeneratedContent, GenerationRequest, validate_response
from ..utils.errors import ContentValidationError, GenerationFailedError, ProviderError, ProviderTimeout
from ..utils.metrics import record_generation
from ..utils.offline_content import create_offline_content
from ..utils.sampling import RandomSource, default_source, uniform
from ..utils.timing import timer
from .providers import ContentProvider, make_provider


class GenerationMode(str, Enum):
    ALWAYS_OFFLINE = "always_offline"
    PROVIDER_THEN_OFFLINE = "provider_then_offline"
    PROVIDER_ONLY = "provider_only"


# (use_mock, production) -> mode
MODE_TABLE: Dict[Tuple[bool, bool], GenerationMode] = {
    (True, False): GenerationMode.ALWAYS_OFFLINE,
    (True, True): GenerationMode.ALWAYS_OFFLINE,
    (False, False): GenerationMode.PROVIDER_THEN_OFFLINE,
    (False, True): GenerationMode.PROVIDER_ONLY,
}

# What a provider-path failure turns into, per mode
ON_PROVIDER_FAILURE: Dict[GenerationMode, str] = {
    GenerationMode.PROVIDER_THEN_OFFLINE: "offline",
    GenerationMode.PROVIDER_ONLY: "fail",
}


def resolve_mode(cfg: GenerationConfig) -> GenerationMode:
    return MODE_TABLE[(bool(cfg.use_mock), bool(cfg.production))]


class ContentGenerator:
    """
    Produces validated GeneratedContent for a request.
    Holds no per-call state, so concurrent `generate` calls are independent.
    Config is read from the environment on every call unless one is injected.
    """

    def __init__(
        self,
        provider: Optional[ContentProvider] = None,
        config: Optional[GenerationConfig] = None,
        rng: Optional[RandomSource] = None,
    ) -> None:
        self._provider = provider
        self._config = config
        self._rng = rng or default_source()

    def config(self) -> GenerationConfig:
        return self._config or load_generation_config()

    async def offline(self, req: GenerationRequest, cfg: Optional[GenerationConfig] = None) -> GeneratedContent:
        """Deterministic content after a simulated provider delay."""
        cfg = cfg or self.config()
        delay = uniform(cfg.mock_delay_min_s, cfg.mock_delay_max_s, self._rng)
        if delay > 0:
            await asyncio.sleep(delay)
        return validate_response(create_offline_content(req.topic, req.depth))

    async def _from_provider(self, req: GenerationRequest, cfg: GenerationConfig) -> GeneratedContent:
        provider = self._provider or make_provider(cfg)
        try:
            raw: Any = await asyncio.wait_for(provider.fetch(req), timeout=cfg.timeout_s)
        except asyncio.TimeoutError as e:
            raise ProviderTimeout(f"no provider answer within {cfg.timeout_s}s") from e
        except ProviderError:
            raise
        except Exception as e:
            # CancelledError is a BaseException and still propagates
            raise ProviderError(f"provider raised {type(e).__name__}: {e}") from e
        # the provider's output is not trusted
        return validate_response(raw)

    async def generate_with_meta(self, req: GenerationRequest) -> Tuple[GeneratedContent, Dict[str, Any]]:
        """
        Returns (content, meta).
        meta: {"source": "provider" | "offline", "mode": str, "fallback": bool, "error": str | None}
        Raises GenerationFailedError when the mode forbids falling back.
        """
        cfg = self.config()
        mode = resolve_mode(cfg)
        meta: Dict[str, Any] = {"mode": mode.value, "fallback": False, "error": None}

        if mode is GenerationMode.ALWAYS_OFFLINE:
            content = await self.offline(req, cfg)
            meta["source"] = "offline"
            record_generation("offline")
            return content, meta

        with timer() as ms:
            try:
                content = await self._from_provider(req, cfg)
            except (ProviderError, ContentValidationError) as e:
                logger.warning(f"[generate] provider path failed after {ms()}ms: {type(e).__name__}: {e}")
                meta["error"] = type(e).__name__
                if ON_PROVIDER_FAILURE[mode] == "offline":
                    logger.info("[generate] falling back to offline content")
                    content = await self.offline(req, cfg)
                    meta.update(source="offline", fallback=True)
                    record_generation("offline", fallback=True)
                    return content, meta
                record_generation(None, failed=True)
                raise GenerationFailedError() from e

        logger.info(f"[generate] provider ok in {ms()}ms")
        meta["source"] = "provider"
        record_generation("provider")
        return content, meta

    async def generate(self, req: GenerationRequest) -> GeneratedContent:
        content, _ = await self.generate_with_meta(req)
        return content
