# =============================================
# File: daily_concept/utils/catalog.py
# Purpose: Immutable category / adjacency / seed catalog, built once at startup
# =============================================
from __future__ import annotations
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from .errors import CatalogError, EmptyCatalogError

TEASER_MAX_CHARS = 140
MIN_SEEDS_PER_CATEGORY = 10


def text_length(text: str) -> int:
    """Length in UTF-16 code units, so characters outside the BMP count as two."""
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def truncate_text(text: str, max_units: int) -> str:
    """First `max_units` UTF-16 code units; a surrogate pair cut in half is dropped."""
    return text.encode("utf-16-le", "surrogatepass")[: max_units * 2].decode("utf-16-le", errors="ignore")


class TopicSeed(BaseModel):
    topic: str = Field(..., min_length=1)
    teaser: str = Field(..., min_length=1)

    model_config = {
        "frozen": True,
    }


class Catalog:
    """
    Read-only view over categories, their adjacency lists and their seeds.
    Instances are never mutated after `build_catalog` returns them.
    """
    __slots__ = ("_seeds", "_adjacency", "_categories")

    def __init__(self, seeds: Mapping[str, Tuple[TopicSeed, ...]], adjacency: Mapping[str, Tuple[str, ...]]):
        self._seeds = MappingProxyType(dict(seeds))
        self._adjacency = MappingProxyType(dict(adjacency))
        self._categories: Tuple[str, ...] = tuple(self._seeds.keys())

    @property
    def categories(self) -> Tuple[str, ...]:
        return self._categories

    def has_category(self, category: str) -> bool:
        return category in self._seeds

    def seeds_for(self, category: str) -> Tuple[TopicSeed, ...]:
        """Seeds of `category`; empty tuple for an unknown category."""
        return self._seeds.get(category, ())

    def neighbors(self, category: str) -> Tuple[str, ...]:
        return self._adjacency.get(category, ())

    def category_of(self, topic: str) -> Optional[str]:
        for category, seeds in self._seeds.items():
            if any(s.topic == topic for s in seeds):
                return category
        return None

    def __len__(self) -> int:
        return len(self._categories)

    def __repr__(self) -> str:
        total = sum(len(s) for s in self._seeds.values())
        return f"Catalog(categories={len(self._categories)}, seeds={total})"


def _check_category(category: str, seeds: Sequence[TopicSeed], min_seeds: int) -> None:
    if len(seeds) < min_seeds:
        raise CatalogError(f"category '{category}' has {len(seeds)} seeds (need >= {min_seeds})")
    seen = set()
    for s in seeds:
        if s.topic in seen:
            raise CatalogError(f"duplicate topic '{s.topic}' in category '{category}'")
        seen.add(s.topic)
        if text_length(s.teaser) > TEASER_MAX_CHARS:
            raise CatalogError(
                f"teaser for '{s.topic}' is {text_length(s.teaser)} chars (max {TEASER_MAX_CHARS})"
            )


def build_catalog(
    seeds: Mapping[str, Iterable[Tuple[str, str]]],
    adjacency: Mapping[str, Iterable[str]],
    min_seeds: int = MIN_SEEDS_PER_CATEGORY,
) -> Catalog:
    """
    Validate raw (topic, teaser) pairs + adjacency lists and freeze them into a Catalog.
    Categories keep the order of `seeds`.
    """
    if not seeds:
        raise EmptyCatalogError("catalog has no categories")

    frozen: Dict[str, Tuple[TopicSeed, ...]] = {}
    for category, pairs in seeds.items():
        items = tuple(TopicSeed(topic=t, teaser=teaser) for t, teaser in pairs)
        _check_category(category, items, min_seeds)
        frozen[category] = items

    adj: Dict[str, Tuple[str, ...]] = {}
    for category, related in adjacency.items():
        if category not in frozen:
            raise CatalogError(f"adjacency references unknown category '{category}'")
        related = tuple(related)
        for r in related:
            if r not in frozen:
                raise CatalogError(f"adjacency of '{category}' references unknown category '{r}'")
        adj[category] = related

    return Catalog(frozen, adj)


@lru_cache(maxsize=1)
def load_default_catalog() -> Catalog:
    """Catalog built from the bundled seed module (built on first call, then reused)."""
    from ..data.seeds import CATEGORY_ADJACENCY, SEED_TOPICS
    return build_catalog(SEED_TOPICS, CATEGORY_ADJACENCY)
