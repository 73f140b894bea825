# =============================================
# File: daily_concept/services/providers.py
# Purpose: Content provider adapters (HTTP endpoint or OpenAI chat completions)
# =============================================
from __future__ import annotations
import json
from typing import Any, Dict, Optional, Protocol

import httpx
from openai import AsyncOpenAI, APITimeoutError, OpenAIError

from ..utils.config import GenerationConfig
from ..utils.content_contract import GenerationRequest
from ..utils.errors import ProviderError, ProviderTimeout
from ..utils.prompting import build_messages


class ContentProvider(Protocol):
    """Returns the raw, untrusted candidate; validation happens in the generator."""
    name: str

    async def fetch(self, req: GenerationRequest) -> Any: ...


class HttpContentProvider:
    name = "http"

    def __init__(
        self,
        base_url: str,
        timeout_s: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s
        self._transport = transport

    async def fetch(self, req: GenerationRequest) -> Any:
        url = f"{self._base_url}/generate"
        payload = req.model_dump(by_alias=True)
        try:
            async with httpx.AsyncClient(timeout=self._timeout_s, transport=self._transport) as client:
                resp = await client.post(url, json=payload)
        except httpx.TimeoutException as e:
            raise ProviderTimeout(f"provider timed out after {self._timeout_s}s") from e
        except httpx.HTTPError as e:
            raise ProviderError(f"provider request failed: {e}") from e

        if not resp.is_success:
            raise ProviderError(f"provider returned HTTP {resp.status_code}")
        try:
            return resp.json()
        except ValueError as e:
            raise ProviderError("provider returned a non-JSON body") from e


def _parse_llm_json(text: str) -> Dict[str, Any]:
    """
    Extract the JSON object from the model output.
    Tolerant to small wrappers (code fences, a leading sentence) around it.
    """
    start = (text or "").find("{")
    end = (text or "").rfind("}")
    if start == -1 or end <= start:
        raise ProviderError("model output contains no JSON object")
    try:
        data = json.loads(text[start:end + 1])
    except json.JSONDecodeError as e:
        raise ProviderError("model output is not valid JSON") from e
    if not isinstance(data, dict):
        raise ProviderError("model output is not a JSON object")
    return data


class OpenAIContentProvider:
    name = "openai"

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        timeout_s: float = 30.0,
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        self._model = model
        self._temperature = temperature
        self._timeout_s = timeout_s
        self._client = client

    async def fetch(self, req: GenerationRequest) -> Any:
        owned = self._client is None
        try:
            client = self._client or AsyncOpenAI(timeout=self._timeout_s, max_retries=0)
        except OpenAIError as e:
            # typically a missing OPENAI_API_KEY
            raise ProviderError(f"openai client unavailable: {e}") from e

        try:
            resp = await client.chat.completions.create(
                model=self._model,
                response_format={"type": "json_object"},
                temperature=self._temperature,
                messages=build_messages(req),
            )
        except APITimeoutError as e:
            raise ProviderTimeout(f"openai timed out after {self._timeout_s}s") from e
        except OpenAIError as e:
            raise ProviderError(f"openai request failed: {e}") from e
        finally:
            if owned:
                await client.close()

        if not getattr(resp, "choices", None):
            raise ProviderError("openai returned no choices")
        text = (resp.choices[0].message.content or "").strip()
        return _parse_llm_json(text)


def make_provider(cfg: GenerationConfig) -> ContentProvider:
    if cfg.provider == "openai":
        return OpenAIContentProvider(model=cfg.llm_model, temperature=cfg.llm_temperature, timeout_s=cfg.timeout_s)
    return HttpContentProvider(cfg.api_base_url, timeout_s=cfg.timeout_s)
