# =============================================
# File: daily_concept/utils/offline_content.py
# Purpose: Deterministic offline content (no network, no randomness)
# =============================================
from __future__ import annotations
from typing import Dict, List

from .catalog import TEASER_MAX_CHARS, text_length, truncate_text
from .content_contract import Depth, GeneratedContent

METAPHORS = [
    "like a bridge connecting two distant islands",
    "similar to how a seed grows into a tree",
    "like pieces of a puzzle fitting together",
    "comparable to a recipe that creates something new",
    "like a key unlocking a door",
    "similar to how water finds its path downhill",
    "like layers of an onion revealing deeper truth",
    "comparable to how roots anchor a tree",
    "like a lens focusing scattered light",
    "similar to how gears work together in a clock",
]

EXAMPLES = [
    "streaming services using recommendation algorithms",
    "smartphone features we use daily without thinking",
    "how coffee shops design their spaces",
    "the way social networks grow and spread",
    "modern architecture in cities",
    "how online shopping changed retail",
    "educational apps for children",
    "renewable energy in communities",
    "food delivery logistics",
    "remote work collaboration tools",
]

IMPACTS = [
    "reshaping how we make decisions",
    "influencing our daily choices",
    "changing professional landscapes",
    "affecting future generations",
    "transforming industries",
    "creating new opportunities",
    "solving longstanding challenges",
    "connecting people globally",
    "improving quality of life",
    "driving innovation forward",
]

QUESTION_TEMPLATES = [
    "How might {topic} affect your daily life in the next five years?",
    "What would change if more people understood {topic}?",
    "How does {topic} connect to other things you care about?",
    "What surprised you most about {topic}?",
    "How could you apply {topic} to a current challenge?",
    "What assumptions about {topic} might be worth questioning?",
    "How has {topic} evolved over time?",
    "What makes {topic} relevant right now?",
    "How might {topic} look different in another culture?",
    "What's one way you could explore {topic} further?",
]

TEASER_TEMPLATES = [
    "Understanding {topic} changes how you see the world",
    "Why {topic} matters more than you think",
    "The surprising truth about {topic}",
    "How {topic} shapes our daily lives",
    "{topic} explained simply",
    "What everyone should know about {topic}",
    "The key to understanding {topic}",
    "{topic} and why it's relevant today",
]

FILLER = (
    "This concept is fundamental to understanding how different systems interact and influence "
    "each other in complex ways. When we examine it closely, we find patterns that repeat across "
    "various domains. These patterns help us make predictions and informed decisions. "
)

# Paragraph length targets per depth: eli7, deeper, example, whyItMatters
TARGETS: Dict[str, Dict[str, int]] = {
    "light": {"eli7": 320, "deeper": 360, "example": 320, "whyItMatters": 280},
    "normal": {"eli7": 640, "deeper": 720, "example": 640, "whyItMatters": 560},
}


def topic_hash(text: str) -> int:
    """
    Classic `h = h * 31 + unit` string hash over UTF-16 code units with signed
    32-bit wraparound, returned as an absolute value. Stable across processes.
    """
    h = 0
    data = (text or "").encode("utf-16-le")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def _choose(table: List[str], h: int) -> str:
    return table[h % len(table)]


def make_teaser(topic: str) -> str:
    teaser = _choose(TEASER_TEMPLATES, topic_hash(topic)).format(topic=topic)
    if text_length(teaser) <= TEASER_MAX_CHARS:
        return teaser
    return truncate_text(teaser, TEASER_MAX_CHARS - 3) + "..."


def _paragraph(opening: str, target: int, closing: str) -> str:
    body = opening
    while len(body) + len(closing) < target:
        body += FILLER
    return body + closing


def create_offline_content(topic: str, depth: Depth = "normal") -> GeneratedContent:
    """Pure function of (topic, depth): identical inputs give byte-identical fields."""
    h = topic_hash(topic)
    targets = TARGETS["light" if depth == "light" else "normal"]

    return GeneratedContent(
        topic=topic,
        teaser=make_teaser(topic),
        eli7=_paragraph(
            f"Think of {topic} {_choose(METAPHORS, h)}. ",
            targets["eli7"],
            "It's something that once you understand it, you'll start noticing it everywhere. "
            "The key idea is that it works by connecting different elements in a way that creates "
            "something more powerful than the individual parts alone.",
        ),
        deeper=_paragraph(
            f"{topic} operates through several interconnected principles. ",
            targets["deeper"],
            "The underlying mechanism involves specific patterns and relationships that emerge when "
            "certain conditions are met. Understanding these patterns helps us see why it works the "
            "way it does and predict how it might behave in different contexts.",
        ),
        example=_paragraph(
            f"Consider {_choose(EXAMPLES, h)}. ",
            targets["example"],
            f"This demonstrates {topic} in action. The practical application shows how theoretical "
            "concepts translate into real-world outcomes that affect people's lives. This example is "
            "particularly relevant because it's something many of us encounter regularly.",
        ),
        why_it_matters=_paragraph(
            f"{topic} matters today because it's actively {_choose(IMPACTS, h)}. ",
            targets["whyItMatters"],
            "Beyond immediate applications, understanding this concept equips us to navigate a "
            "changing world more effectively. It influences decisions at personal, professional, "
            "and societal levels.",
        ),
        reflection_question=_choose(QUESTION_TEMPLATES, h).format(topic=topic),
    )
