# =============================================
# File: daily_concept/routers/metrics.py
# Purpose: Service counters plus a generation health summary
# =============================================
from __future__ import annotations
from typing import Any, Dict

from fastapi import APIRouter

from ..utils.metrics import generation_summary, snapshot

router = APIRouter(prefix="/metrics", tags=["metrics"])


@router.get("")
def get_metrics() -> Dict[str, Any]:
    """Full snapshot with the generation summary attached."""
    snap = snapshot()
    snap["generation"] = generation_summary()
    return snap


@router.get("/generation")
def get_generation_metrics() -> Dict[str, Any]:
    """Whether content comes from the provider, the offline fallback, or not at all."""
    return generation_summary()
