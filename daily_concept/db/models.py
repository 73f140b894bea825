# =============================================
# File: daily_concept/db/models.py
# Purpose: Records kept by the key-value store: preferences, today's topic, topic entries
# =============================================

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from ..utils.content_contract import Depth, GeneratedContent

EntrySource = Literal["dailyRecommendation", "userQuery"]


class CamelModel(BaseModel):
    model_config = {
        "populate_by_name": True,
    }


class UserPreferences(CamelModel):
    selected_interests: List[str] = Field(default_factory=list, alias="selectedInterests")
    depth: Depth = "normal"
    audio_enabled: bool = Field(True, alias="audioEnabled")
    has_completed_onboarding: bool = Field(False, alias="hasCompletedOnboarding")


class TodayTopic(CamelModel):
    date_key: str = Field(..., alias="dateKey")  # YYYY-MM-DD
    topic: str
    teaser: str
    category: str
    entry_id: Optional[str] = Field(None, alias="entryId")


class TopicEntry(CamelModel):
    id: str
    date: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    topic: str
    teaser: str
    eli7: str
    deeper: str
    example: str
    why_it_matters: str = Field(..., alias="whyItMatters")
    reflection_question: str = Field(..., alias="reflectionQuestion")
    source: EntrySource
    category: Optional[str] = None
    is_favorite: bool = Field(False, alias="isFavorite")

    @classmethod
    def from_content(cls, entry_id: str, content: GeneratedContent, source: EntrySource,
                     category: Optional[str] = None) -> "TopicEntry":
        return cls(id=entry_id, source=source, category=category, **content.to_wire())
