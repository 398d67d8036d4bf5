from __future__ import annotations

from collections import Counter
from typing import Iterable, List, Optional, Sequence, Tuple

from .normalizer import normalize_all
from .rules import PLACEHOLDER_TAG

EMPTY_MARK = "-"


def _flatten(tag_lists: Iterable[Optional[Sequence[str]]]) -> List[str]:
    items: List[str] = []
    for tags in tag_lists:
        for tag in tags or []:
            if tag and tag != PLACEHOLDER_TAG:
                items.append(tag)
    return items


def tag_counts(tag_lists: Iterable[Optional[Sequence[str]]]) -> Counter:
    return Counter(normalize_all(_flatten(tag_lists)))


def top_emotion_tags(
    tag_lists: Iterable[Optional[Sequence[str]]], limit: int = 5
) -> List[Tuple[str, int]]:
    # Counter.most_common keeps first-seen order among equal counts.
    return tag_counts(tag_lists).most_common(max(0, limit))


def most_frequent_emotion(tag_lists: Iterable[Optional[Sequence[str]]]) -> str:
    top = top_emotion_tags(tag_lists, limit=1)
    return top[0][0] if top else EMPTY_MARK


def emotion_pattern(tag_lists: Iterable[Optional[Sequence[str]]], limit: int = 3) -> str:
    top = top_emotion_tags(tag_lists, limit=limit)
    if not top:
        return EMPTY_MARK
    return ", ".join(tag for tag, _ in top)


_TONE_COPY = (
    (("행복", "기쁨", "설렘", "긍정"), "밝은 에너지가 자주 등장한 달이에요"),
    (("불안", "걱정"), "긴장감이 높았던 달로 보여요"),
    (("분노", "짜증", "격양"), "스트레스 신호가 자주 포착됐어요"),
    (("슬픔", "우울", "침잠"), "차분히 마음을 돌본 시간이 필요했던 달이에요"),
    (("피로", "저에너지", "과부하"), "쉼이 필요하다는 신호가 많았어요"),
    (("안정", "감사", "집중"), "안정적인 흐름을 유지한 달이에요"),
)


def tone_copy(emotion: Optional[str]) -> str:
    if not emotion or emotion in (EMPTY_MARK, PLACEHOLDER_TAG):
        return "감정 태그가 더 쌓이면 흐름을 보여줄게요"
    for hints, copy in _TONE_COPY:
        if any(hint in emotion for hint in hints):
            return copy
    return "다양한 감정이 고르게 기록된 달이에요"


def summarize_emotions(tag_lists: Iterable[Optional[Sequence[str]]], limit: int = 5) -> dict:
    lists = list(tag_lists)
    top = top_emotion_tags(lists, limit=limit)
    dominant = top[0][0] if top else EMPTY_MARK
    return {
        "top": [{"tag": tag, "count": count} for tag, count in top],
        "most_frequent": dominant,
        "pattern": emotion_pattern(lists),
        "tone": tone_copy(dominant),
        "entries": len(lists),
    }
