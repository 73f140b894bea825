# =============================================
# File: daily_concept/routers/daily.py
# Purpose: Today's topic, teach-me flow, history entries, preferences
# =============================================
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel, Field, field_validator

from ..db.models import TodayTopic, TopicEntry, UserPreferences
from ..services.daily import DailyTopicService
from ..utils import slog
from ..utils.errors import GenerationFailedError
from ..utils.recommend_core import RecommendationResult

router = APIRouter(tags=["daily"])

_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class TeachTodayRequest(BaseModel):
    date: Optional[str] = Field(None, pattern=_DATE_PATTERN)
    locale: str = "en-US"


class TeachQueryRequest(TeachTodayRequest):
    query: str = Field(..., min_length=1, max_length=500)

    @field_validator("query")
    @classmethod
    def _trim_query(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("query must not be empty")
        return v


class AlternativesRequest(BaseModel):
    date: Optional[str] = Field(None, pattern=_DATE_PATTERN)
    count: int = Field(2, ge=1, le=10)


class SelectRequest(BaseModel):
    date: Optional[str] = Field(None, pattern=_DATE_PATTERN)
    choice: RecommendationResult


class FavoriteRequest(BaseModel):
    favorite: bool = True


def _daily(request: Request) -> DailyTopicService:
    return request.app.state.daily


async def _run_teach(request: Request, coro) -> TopicEntry:
    try:
        entry = await coro
    except GenerationFailedError:
        request.state.log_context["generation_failed"] = True
        raise
    request.state.log_context["entry_id"] = entry.id
    return entry


# ---------- Today ----------
@router.get("/today", response_model=TodayTopic)
def get_today(request: Request, date: Optional[str] = Query(None, pattern=_DATE_PATTERN)) -> TodayTopic:
    return _daily(request).get_today(date)


@router.post("/today/alternatives")
def post_today_alternatives(req: AlternativesRequest, request: Request):
    alts = _daily(request).pick_alternatives(req.date, count=req.count)
    return {"alternatives": [a.model_dump() for a in alts]}


@router.post("/today/select", response_model=TodayTopic)
def post_today_select(req: SelectRequest, request: Request) -> TodayTopic:
    return _daily(request).select_alternative(req.choice, req.date)


@router.post("/today/teach", response_model=TopicEntry)
async def post_today_teach(req: TeachTodayRequest, request: Request) -> TopicEntry:
    request.state.log_context = {"source": "dailyRecommendation"}
    return await _run_teach(request, _daily(request).teach_today(req.date, locale=req.locale))


@router.post("/teach", response_model=TopicEntry)
async def post_teach_query(req: TeachQueryRequest, request: Request) -> TopicEntry:
    request.state.log_context = {"source": "userQuery", "thash": slog.thash(req.query)}
    try:
        coro = _daily(request).teach_query(req.query, req.date, locale=req.locale)
        return await _run_teach(request, coro)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


# ---------- History ----------
@router.get("/entries", response_model=List[TopicEntry])
def get_entries(request: Request, q: Optional[str] = Query(None, max_length=200)) -> List[TopicEntry]:
    store = _daily(request).store
    return store.search_entries(q) if q else store.get_entries()


@router.get("/entries/{entry_id}", response_model=TopicEntry)
def get_entry(entry_id: str, request: Request) -> TopicEntry:
    entry = _daily(request).store.get_entry(entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Entry not found.")
    return entry


@router.post("/entries/{entry_id}/favorite", response_model=TopicEntry)
def post_entry_favorite(entry_id: str, req: FavoriteRequest, request: Request) -> TopicEntry:
    entry = _daily(request).store.update_entry(entry_id, is_favorite=req.favorite)
    if entry is None:
        raise HTTPException(status_code=404, detail="Entry not found.")
    return entry


# ---------- Preferences / data ----------
@router.get("/preferences", response_model=UserPreferences)
def get_preferences(request: Request) -> UserPreferences:
    return _daily(request).store.get_preferences()


@router.put("/preferences", response_model=UserPreferences)
def put_preferences(prefs: UserPreferences, request: Request) -> UserPreferences:
    _daily(request).store.set_preferences(prefs)
    return prefs


@router.delete("/data")
def delete_all_data(request: Request):
    _daily(request).store.clear_all()
    return {"status": "cleared"}
