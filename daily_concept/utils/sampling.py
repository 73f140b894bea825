# =============================================
# File: daily_concept/utils/sampling.py
# Purpose: Injectable random source + uniform pick helpers
# =============================================
from __future__ import annotations
import random
from typing import Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """Anything with a `random()` returning a float in [0, 1). `random.Random` qualifies."""
    def random(self) -> float: ...


def default_source() -> RandomSource:
    return random.Random()


def pick(items: Sequence[T], rng: RandomSource) -> T:
    """
    Uniform pick that consumes exactly one draw from `rng`.
    Every random decision in the recommender goes through here so a scripted
    source can pin both the branch and the item that gets chosen.
    """
    if not items:
        raise IndexError("cannot pick from an empty sequence")
    idx = int(rng.random() * len(items))
    # guard against sources that hand back 1.0
    return items[min(idx, len(items) - 1)]


def uniform(low: float, high: float, rng: RandomSource) -> float:
    if high <= low:
        return max(0.0, low)
    return low + (high - low) * rng.random()
