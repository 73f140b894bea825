# daily_concept/utils/sanitize.py
from __future__ import annotations
import re
from typing import Iterable

_INJECTION_CUES = [
    "ignore previous instruction",
    "ignore the previous instruction",
    "disregard previous instruction",
    "system prompt",
    "developer message",
    "you are chatgpt",
    "act as",
    "jailbreak",
]

_WHITESPACE_RE = re.compile(r"\s+")

TOPIC_MAX_CHARS = 120


def collapse_ws(text: str) -> str:
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()


def strip_cues(text: str, cues: Iterable[str] = _INJECTION_CUES) -> str:
    """Remove prompt-injection cue phrases inline (case-insensitive)."""
    t = text or ""
    for c in cues:
        t = re.sub(re.escape(c), "", t, flags=re.IGNORECASE)
    return t


def clean_topic(text: str, max_chars: int = TOPIC_MAX_CHARS) -> str:
    """
    Normalize a free-text topic typed by the user before it is sent to a provider:
    drop cue phrases, collapse whitespace, then truncate on a word boundary when possible.
    """
    t = collapse_ws(strip_cues(text))
    if max_chars and len(t) > max_chars:
        cut = t[:max_chars]
        if " " in cut:
            cut = cut.rsplit(" ", 1)[0]
        t = cut.rstrip()
    return t
