# =============================================
# File: tests/test_content_contract.py
# Purpose: Validator accepts well-formed content and reports every violated rule
# =============================================
import sys, os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import pytest

from daily_concept.utils.content_contract import (
    GeneratedContent,
    GenerationRequest,
    collect_violations,
    validate_response,
)
from daily_concept.utils.errors import ContentValidationError


def _valid(**overrides):
    data = {
        "topic": "Test Topic",
        "teaser": "A test teaser",
        "eli7": "Simple explanation",
        "deeper": "Deeper explanation",
        "example": "Example text",
        "whyItMatters": "Why it matters",
        "reflectionQuestion": "What do you think?",
    }
    data.update(overrides)
    return data


def test_accepts_valid_content():
    out = validate_response(_valid())
    assert isinstance(out, GeneratedContent)
    assert out.to_wire() == _valid()


def test_teaser_of_exactly_140_is_accepted():
    out = validate_response(_valid(teaser="A" * 140))
    assert len(out.teaser) == 140


def test_teaser_of_141_is_rejected():
    with pytest.raises(ContentValidationError) as ei:
        validate_response(_valid(teaser="A" * 141))
    assert ei.value.violations == ["Teaser exceeds 140 characters"]


def test_reflection_question_needs_question_mark():
    with pytest.raises(ContentValidationError) as ei:
        validate_response(_valid(reflectionQuestion="Not a question"))
    assert "Reflection question must end with ?" in str(ei.value)


def test_reflection_question_is_trimmed_before_checking():
    out = validate_response(_valid(reflectionQuestion="  Why though?  \n"))
    # returned unchanged, not repaired
    assert out.reflection_question == "  Why though?  \n"


def test_all_violations_are_accumulated():
    data = _valid()
    del data["topic"]
    del data["reflectionQuestion"]
    with pytest.raises(ContentValidationError) as ei:
        validate_response(data)
    msg = str(ei.value)
    assert "Missing or invalid topic" in msg
    assert "Missing or invalid reflectionQuestion" in msg
    assert len(ei.value.violations) == 2


def test_non_string_and_blank_fields_are_invalid():
    violations = collect_violations(_valid(eli7=42, deeper="   ", teaser=None))
    assert violations == [
        "Missing or invalid teaser",
        "Missing or invalid eli7",
        "Missing or invalid deeper",
    ]


def test_non_mapping_candidate_fails_every_field():
    with pytest.raises(ContentValidationError) as ei:
        validate_response(["not", "a", "dict"])
    assert len(ei.value.violations) == 7


def test_long_teaser_and_bad_question_reported_together():
    violations = collect_violations(_valid(teaser="x" * 200, reflectionQuestion="Tell me more."))
    assert violations == ["Teaser exceeds 140 characters", "Reflection question must end with ?"]


def test_generated_content_instance_is_revalidated():
    content = validate_response(_valid())
    assert validate_response(content) == content


def test_generation_request_wire_shape():
    req = GenerationRequest.model_validate({
        "topic": "  Entropy ",
        "depth": "light",
        "userInterests": ["Science"],
        "context": {"date": "2026-01-26", "locale": "en-US"},
    })
    assert req.topic == "Entropy"
    assert req.model_dump(by_alias=True) == {
        "topic": "Entropy",
        "depth": "light",
        "userInterests": ["Science"],
        "context": {"date": "2026-01-26", "locale": "en-US"},
    }


def test_generation_request_rejects_unknown_depth():
    with pytest.raises(ValueError):
        GenerationRequest(topic="Entropy", depth="deep", context={"date": "2026-01-26"})


def test_teaser_limit_counts_utf16_units():
    # each emoji is two UTF-16 code units
    assert collect_violations(_valid(teaser="\U0001F600" * 70)) == []
    assert collect_violations(_valid(teaser="\U0001F600" * 71)) == ["Teaser exceeds 140 characters"]
