# =============================================
# File: daily_concept/utils/content_contract.py
# Purpose: Generation request / generated content schemas + the content validator
# =============================================
from __future__ import annotations
from typing import Any, Dict, List, Literal, Mapping, Tuple

from pydantic import BaseModel, Field, field_validator

from .catalog import TEASER_MAX_CHARS, text_length
from .errors import ContentValidationError

Depth = Literal["light", "normal"]

# Wire names (camelCase) in the order violations are reported
REQUIRED_FIELDS: Tuple[str, ...] = (
    "topic",
    "teaser",
    "eli7",
    "deeper",
    "example",
    "whyItMatters",
    "reflectionQuestion",
)


class GenerationContext(BaseModel):
    date: str = Field(..., description="Calendar day the content is for, YYYY-MM-DD")
    locale: str = "en-US"


class GenerationRequest(BaseModel):
    """
    Input to content generation. Serialized with camelCase keys (by_alias=True)
    when sent to a provider.
    """
    topic: str = Field(..., min_length=1, max_length=200)
    depth: Depth = "normal"
    user_interests: List[str] = Field(default_factory=list, alias="userInterests")
    context: GenerationContext

    model_config = {
        "populate_by_name": True,
    }

    @field_validator("topic")
    @classmethod
    def _trim_topic(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("topic must not be empty")
        return v


class GeneratedContent(BaseModel):
    topic: str
    teaser: str
    eli7: str
    deeper: str
    example: str
    why_it_matters: str = Field(..., alias="whyItMatters")
    reflection_question: str = Field(..., alias="reflectionQuestion")

    model_config = {
        "populate_by_name": True,
        "frozen": True,
    }

    def to_wire(self) -> Dict[str, str]:
        return self.model_dump(by_alias=True)


def _as_mapping(candidate: Any) -> Mapping[str, Any]:
    if isinstance(candidate, GeneratedContent):
        return candidate.to_wire()
    if isinstance(candidate, Mapping):
        return candidate
    return {}


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def collect_violations(candidate: Any) -> List[str]:
    """Every broken rule, in a stable order. Empty list means the candidate is valid."""
    data = _as_mapping(candidate)
    errors: List[str] = []

    for name in REQUIRED_FIELDS:
        if not _is_text(data.get(name)):
            errors.append(f"Missing or invalid {name}")

    teaser = data.get("teaser")
    if isinstance(teaser, str) and text_length(teaser) > TEASER_MAX_CHARS:
        errors.append(f"Teaser exceeds {TEASER_MAX_CHARS} characters")

    question = data.get("reflectionQuestion")
    if _is_text(question) and not question.strip().endswith("?"):
        errors.append("Reflection question must end with ?")

    return errors


def validate_response(candidate: Any) -> GeneratedContent:
    """
    Trust boundary for generated content: raises ContentValidationError listing
    all violations, otherwise returns the same values typed as GeneratedContent.
    Nothing is repaired.
    """
    errors = collect_violations(candidate)
    if errors:
        raise ContentValidationError(errors)
    data = _as_mapping(candidate)
    return GeneratedContent(**{name: data[name] for name in REQUIRED_FIELDS})
