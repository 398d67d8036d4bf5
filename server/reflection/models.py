from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class ReflectionAnalysis:
    summary: str
    emotion_tags: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"summary": self.summary, "emotionTags": list(self.emotion_tags)}


@dataclass(frozen=True)
class CandidateSummary:
    summary: str
    emotion_tags: Tuple[str, ...] = ()
    source: str = "external"


@dataclass(frozen=True)
class EmotionRule:
    tag: str
    keywords: Tuple[str, ...]

    def matches(self, text: str) -> bool:
        lowered = text.lower()
        return any(keyword.lower() in lowered for keyword in self.keywords)
