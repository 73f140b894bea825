# =============================================
# File: daily_concept/services/recommender.py
# Purpose: Pick today's topic (interest / adjacent / wildcard) and alternative suggestions
# =============================================

from __future__ import annotations
from typing import Iterable, List, Optional, Sequence, Tuple
from loguru import logger

from ..utils.catalog import Catalog, TopicSeed
from ..utils.errors import EmptyCatalogError
from ..utils.recommend_core import RecommendationResult, normalize_interests
from ..utils.sampling import RandomSource, default_source, pick

# Cumulative thresholds for the single branch draw
INTEREST_SHARE = 0.70
ADJACENT_SHARE = 0.90  # 0.70..0.90 adjacent, the rest wildcard

ALTERNATIVE_ATTEMPTS_PER_SLOT = 10


class Recommender:
    """
    Stateless topic picker over a read-only Catalog.
    History is a borrowed snapshot (most-recent-first titles) and is never mutated.
    """

    def __init__(self, catalog: Catalog, rng: Optional[RandomSource] = None) -> None:
        self._catalog = catalog
        self._rng = rng or default_source()

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def get_categories(self) -> Tuple[str, ...]:
        return self._catalog.categories

    def get_topics_for_category(self, category: str) -> Tuple[TopicSeed, ...]:
        return self._catalog.seeds_for(category)

    def _resolve_category(self, interests: List[str]) -> Tuple[str, str]:
        rng = self._rng
        roll = rng.random()
        if roll < INTEREST_SHARE:
            return pick(interests, rng), "interest"
        if roll < ADJACENT_SHARE:
            base = pick(interests, rng)
            related = self._catalog.neighbors(base)
            if related:
                return pick(related, rng), "adjacent"
            return pick(interests, rng), "adjacent_fallback"
        return pick(self._catalog.categories, rng), "wildcard"

    def _pick_seed(self, category: str, recent: Sequence[str]) -> TopicSeed:
        pool = self._catalog.seeds_for(category)
        if not pool:
            raise EmptyCatalogError(f"category '{category}' has no seeds")
        recent_set = set(recent or ())
        fresh = [s for s in pool if s.topic not in recent_set]
        # every topic shown recently: reuse the whole category rather than fail
        return pick(fresh or list(pool), self._rng)

    def choose_topic_for_today(
        self,
        user_interests: Iterable[str],
        recent_history: Sequence[str] = (),
    ) -> RecommendationResult:
        interests = normalize_interests(user_interests, self._catalog)

        if not self._catalog.categories:
            raise EmptyCatalogError("catalog has no categories")

        if not interests:
            # cold start: no onboarding data, history not consulted
            category = pick(self._catalog.categories, self._rng)
            seed = self._pick_seed(category, ())
            branch = "cold_start"
        else:
            category, branch = self._resolve_category(interests)
            seed = self._pick_seed(category, recent_history)

        logger.debug(f"[recommend] branch={branch} category={category} topic={seed.topic}")
        return RecommendationResult(topic=seed.topic, teaser=seed.teaser, category=category)

    def get_alternative_topics(
        self,
        current_topic: str,
        user_interests: Iterable[str],
        count: int = 2,
        recent_history: Sequence[str] = (),
    ) -> List[RecommendationResult]:
        """
        Up to `count` distinct picks, none equal to `current_topic`.
        Bounded at ALTERNATIVE_ATTEMPTS_PER_SLOT * count attempts, so a tiny
        pool can legitimately yield fewer items.
        """
        interests = list(user_interests or [])
        picks: List[RecommendationResult] = []
        if count <= 0:
            return picks

        seen = {current_topic}
        attempts = 0
        max_attempts = ALTERNATIVE_ATTEMPTS_PER_SLOT * count
        while len(picks) < count and attempts < max_attempts:
            attempts += 1
            rec = self.choose_topic_for_today(interests, recent_history)
            if rec.topic in seen:
                continue
            seen.add(rec.topic)
            picks.append(rec)

        if len(picks) < count:
            logger.info(f"[recommend] alternatives short: wanted={count} got={len(picks)} attempts={attempts}")
        return picks
