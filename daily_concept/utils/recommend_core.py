# =============================================
# File: daily_concept/utils/recommend_core.py
# Purpose: Recommendation result schema + interest normalization
# =============================================

from pydantic import BaseModel
from typing import Iterable, List

from .catalog import Catalog


class RecommendationResult(BaseModel):
    topic: str
    teaser: str
    category: str

    model_config = {
        "frozen": True,
    }


def normalize_interests(interests: Iterable[str], catalog: Catalog) -> List[str]:
    """Known categories only, first occurrence wins, caller's order kept."""
    out: List[str] = []
    for c in interests or []:
        c = (c or "").strip()
        if c and catalog.has_category(c) and c not in out:
            out.append(c)
    return out
