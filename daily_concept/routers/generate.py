# =============================================
# File: daily_concept/routers/generate.py
# Purpose: Content generation + standalone contract validation endpoints
# =============================================
from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException, Request

from ..services.generation import ContentGenerator
from ..utils import slog
from ..utils.content_contract import GeneratedContent, GenerationRequest, validate_response
from ..utils.errors import ContentValidationError, GenerationFailedError

router = APIRouter(tags=["generate"])


@router.post("/generate", response_model=GeneratedContent)
async def post_generate(req: GenerationRequest, request: Request) -> GeneratedContent:
    """
    Generate validated content for a topic.
    Provider failures either fall back to offline content or end in a 502 with a
    generic message, depending on configuration.
    """
    generator: ContentGenerator = request.app.state.generator
    request.state.log_context = {"thash": slog.thash(req.topic), "depth": req.depth}
    try:
        content, meta = await generator.generate_with_meta(req)
    except GenerationFailedError:
        request.state.log_context.update({"generation_source": None, "generation_failed": True})
        raise
    request.state.log_context.update({
        "generation_source": meta.get("source"),
        "generation_mode": meta.get("mode"),
        "fallback": bool(meta.get("fallback")),
    })
    return content


@router.post("/validate", response_model=GeneratedContent)
def post_validate(payload: Dict[str, Any] = Body(...)) -> GeneratedContent:
    """Run a candidate through the content contract; 422 lists every violated rule."""
    try:
        return validate_response(payload)
    except ContentValidationError as e:
        raise HTTPException(status_code=422, detail={"message": str(e), "violations": e.violations})
