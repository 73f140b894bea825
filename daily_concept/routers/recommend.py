# daily_concept/routers/recommend.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field, field_validator

from ..db.store import RECENT_TOPICS_CAP
from ..services.recommender import Recommender
from ..utils.catalog import TopicSeed
from ..utils.metrics import record_recommendation
from ..utils.recommend_core import RecommendationResult

router = APIRouter(tags=["recommend"])


# ---------- Schemas ----------
class _InterestsPayload(BaseModel):
    interests: List[str] = Field(default_factory=list, max_length=50)
    recent_topics: List[str] = Field(default_factory=list, alias="recentTopics")

    model_config = {
        "populate_by_name": True,
    }

    @field_validator("recent_topics")
    @classmethod
    def _cap_history(cls, v: List[str]) -> List[str]:
        # only the most recent window is used for de-duplication
        return [t for t in v if isinstance(t, str)][:RECENT_TOPICS_CAP]


class RecommendTodayRequest(_InterestsPayload):
    pass


class AlternativesRequest(_InterestsPayload):
    current_topic: str = Field(..., min_length=1, alias="currentTopic")
    count: int = Field(2, ge=1, le=10)


class AlternativesResponse(BaseModel):
    alternatives: List[RecommendationResult]


class CategoryTopicsResponse(BaseModel):
    category: str
    topics: List[TopicSeed]


def _recommender(request: Request) -> Recommender:
    return request.app.state.recommender


# ---------- Endpoints ----------
@router.get("/categories")
def get_categories(request: Request):
    rec = _recommender(request)
    return {
        "categories": [
            {"name": c, "related": list(rec.catalog.neighbors(c)), "topics": len(rec.get_topics_for_category(c))}
            for c in rec.get_categories()
        ]
    }


@router.get("/categories/{category}/topics", response_model=CategoryTopicsResponse)
def get_category_topics(category: str, request: Request) -> CategoryTopicsResponse:
    """Unknown categories yield an empty list, never an error."""
    topics = _recommender(request).get_topics_for_category(category)
    return CategoryTopicsResponse(category=category, topics=list(topics))


@router.post("/recommend/today", response_model=RecommendationResult)
def post_recommend_today(req: RecommendTodayRequest, request: Request) -> RecommendationResult:
    result = _recommender(request).choose_topic_for_today(req.interests, req.recent_topics)
    record_recommendation()
    request.state.log_context = {"category": result.category, "interests": len(req.interests)}
    return result


@router.post("/recommend/alternatives", response_model=AlternativesResponse)
def post_recommend_alternatives(req: AlternativesRequest, request: Request) -> AlternativesResponse:
    """May return fewer than `count` items when the candidate pool is small."""
    alts = _recommender(request).get_alternative_topics(
        req.current_topic, req.interests, count=req.count, recent_history=req.recent_topics
    )
    record_recommendation()
    request.state.log_context = {"requested": req.count, "returned": len(alts)}
    return AlternativesResponse(alternatives=alts)
