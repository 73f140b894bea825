# =============================================
# File: daily_concept/utils/errors.py
# Purpose: Error kinds shared by the recommender, the content contract and generation
# =============================================
from __future__ import annotations
from typing import Iterable, List

USER_FACING_GENERATION_ERROR = "Failed to generate content. Please try again."


class DailyConceptError(Exception):
    """Base class for every error raised by this package."""


class CatalogError(DailyConceptError):
    """The static topic catalog is malformed (raised while building it)."""


class EmptyCatalogError(DailyConceptError):
    """A category resolved to zero seeds even after dropping the history filter."""


class ContentValidationError(DailyConceptError):
    def __init__(self, violations: Iterable[str]):
        self.violations: List[str] = list(violations)
        super().__init__(f"Content validation failed: {', '.join(self.violations)}")


class ProviderError(DailyConceptError):
    """Non-2xx answer, network failure or unreadable body from the content provider."""


class ProviderTimeout(ProviderError):
    pass


class GenerationFailedError(DailyConceptError):
    """
    The only generation error that reaches API clients.
    Carries a fixed user-facing message; the underlying cause stays in the logs.
    """
    def __init__(self, message: str = USER_FACING_GENERATION_ERROR):
        super().__init__(message)
        self.message = message
