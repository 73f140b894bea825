# =============================================
# File: daily_concept/utils/prompting.py
# Purpose: Build JSON-structured chat messages describing the content contract
# =============================================
from __future__ import annotations
from typing import Dict, List

from .content_contract import GenerationRequest
from .sanitize import clean_topic, collapse_ws

SYS_PROMPT = (
    "You are a patient teacher who explains one concept a day to a curious adult. "
    "Output MUST be a single valid JSON object with exactly these string fields: "
    "\"topic\", \"teaser\", \"eli7\", \"deeper\", \"example\", \"whyItMatters\", \"reflectionQuestion\". "
    "Rules: \"teaser\" is one hook sentence of at most 140 characters; "
    "\"eli7\" explains the idea as if to a seven-year-old; "
    "\"deeper\" adds the mechanism for an adult reader; "
    "\"example\" gives one concrete real-world example; "
    "\"whyItMatters\" says why the idea is relevant today; "
    "\"reflectionQuestion\" is one open question that ends with a question mark. "
    "No markdown, no text outside the JSON."
)

USER_TEMPLATE = (
    "Topic: {topic}\n"
    "Depth: {depth} ({depth_hint})\n"
    "Reader interests: {interests}\n"
    "Date: {date}\n"
    "Locale: {locale}\n"
    "Return ONLY the JSON object."
)

_DEPTH_HINTS = {
    "light": "keep each field to two or three short sentences",
    "normal": "use one full paragraph per field",
}


def build_messages(req: GenerationRequest) -> List[Dict[str, str]]:
    """Messages for the Chat Completions API; the reply must be the seven-field JSON object."""
    interests = ", ".join(collapse_ws(i) for i in req.user_interests if collapse_ws(i)) or "(none given)"
    user = USER_TEMPLATE.format(
        topic=clean_topic(req.topic),
        depth=req.depth,
        depth_hint=_DEPTH_HINTS.get(req.depth, _DEPTH_HINTS["normal"]),
        interests=interests,
        date=req.context.date,
        locale=req.context.locale,
    )
    return [
        {"role": "system", "content": SYS_PROMPT},
        {"role": "user", "content": user},
    ]
