# =============================================
# File: daily_concept/services/daily.py
# Purpose: Daily workflow: today's topic per date, alternatives, teach-me (generate + persist)
# =============================================
from __future__ import annotations
import uuid
from datetime import date
from typing import List, Optional

from loguru import logger

from ..db.models import EntrySource, TodayTopic, TopicEntry
from ..db.store import KeyValueStore
from ..utils.content_contract import GenerationContext, GenerationRequest
from ..utils.recommend_core import RecommendationResult
from ..utils.sanitize import clean_topic
from .generation import ContentGenerator
from .recommender import Recommender


def today_key() -> str:
    return date.today().isoformat()


class DailyTopicService:
    """Composes recommender, generator and store; the store is the only thing written."""

    def __init__(self, store: KeyValueStore, recommender: Recommender, generator: ContentGenerator) -> None:
        self.store = store
        self.recommender = recommender
        self.generator = generator

    def get_today(self, date_key: Optional[str] = None) -> TodayTopic:
        date_key = date_key or today_key()
        existing = self.store.get_today_topic(date_key)
        if existing:
            return existing

        prefs = self.store.get_preferences()
        rec = self.recommender.choose_topic_for_today(prefs.selected_interests, self.store.get_last_14_topics())
        topic = TodayTopic(date_key=date_key, topic=rec.topic, teaser=rec.teaser, category=rec.category)
        self.store.set_today_topic(date_key, topic)
        logger.info(f"[daily] new topic for {date_key}: {rec.topic} ({rec.category})")
        return topic

    def pick_alternatives(self, date_key: Optional[str] = None, count: int = 2) -> List[RecommendationResult]:
        current = self.get_today(date_key)
        prefs = self.store.get_preferences()
        return self.recommender.get_alternative_topics(
            current.topic,
            prefs.selected_interests,
            count=count,
            recent_history=self.store.get_last_14_topics(),
        )

    def select_alternative(self, choice: RecommendationResult, date_key: Optional[str] = None) -> TodayTopic:
        date_key = date_key or today_key()
        topic = TodayTopic(date_key=date_key, topic=choice.topic, teaser=choice.teaser, category=choice.category)
        self.store.set_today_topic(date_key, topic)
        return topic

    async def _teach(self, topic: str, source: EntrySource, date_key: str, locale: str,
                     category: Optional[str]) -> TopicEntry:
        prefs = self.store.get_preferences()
        req = GenerationRequest(
            topic=topic,
            depth=prefs.depth,
            user_interests=prefs.selected_interests,
            context=GenerationContext(date=date_key, locale=locale),
        )
        content, meta = await self.generator.generate_with_meta(req)
        entry = TopicEntry.from_content(uuid.uuid4().hex, content, source=source, category=category)
        self.store.add_entry(entry)
        logger.info(f"[daily] stored entry {entry.id} source={source} via={meta.get('source')}")
        return entry

    async def teach_today(self, date_key: Optional[str] = None, locale: str = "en-US") -> TopicEntry:
        """Generate and store content for today's topic; links the entry into TodayTopic."""
        date_key = date_key or today_key()
        today = self.get_today(date_key)
        entry = await self._teach(today.topic, "dailyRecommendation", date_key, locale, today.category)
        self.store.set_today_topic(date_key, today.model_copy(update={"entry_id": entry.id}))
        return entry

    async def teach_query(self, query: str, date_key: Optional[str] = None, locale: str = "en-US") -> TopicEntry:
        topic = clean_topic(query)
        if not topic:
            raise ValueError("query must contain a topic")
        category = self.recommender.catalog.category_of(topic)
        return await self._teach(topic, "userQuery", date_key or today_key(), locale, category)
