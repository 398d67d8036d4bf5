from __future__ import annotations

from typing import List, Optional, Sequence

from .models import EmotionRule
from .rules import EMOTION_RULES, MOOD_BADGES, MOOD_TAGS, lookup_mood


def detect_tags(text: str, rules: Sequence[EmotionRule] = EMOTION_RULES) -> List[str]:
    if not text:
        return []
    return [rule.tag for rule in rules if rule.matches(text)]


def mood_tag(mood: Optional[str]) -> Optional[str]:
    return lookup_mood(MOOD_TAGS, mood)


def mood_badges(mood: Optional[str]) -> List[str]:
    """Mood expressed in the canonical emotion vocabulary, for badges and chips."""
    badge = lookup_mood(MOOD_BADGES, mood)
    return [badge] if badge else []


def classify(text: str, mood: Optional[str] = None) -> List[str]:
    tags = detect_tags(text)
    derived = mood_tag(mood)
    if derived:
        tags.append(derived)
    return tags
