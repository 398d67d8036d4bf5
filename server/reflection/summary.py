from __future__ import annotations

from typing import List, Optional, Sequence

from .rules import ANXIETY_HINTS, FRUSTRATION_HINTS
from .tokenizer import normalize
from .tuning import DEFAULT_TUNING, AnalyzerTuning

ELLIPSIS = "..."
LINE_ENDINGS = (".", "!", "?")

INSUFFICIENT_LINE = "기록 내용이 짧아 핵심 이슈를 특정하기 어려워요."
INSUFFICIENT_STRUCTURED = (
    "1. 핵심 이슈: 기록 내용이 짧아 핵심 이슈를 특정하기 어려움\n"
    "2. 상황 맥락: 오늘 있었던 구체적인 장면이 더 필요함\n"
    "3. 감정 흐름: 감정 단서가 충분하지 않음"
)
DEFAULT_CONTEXT_LINE = "기록된 내용을 바탕으로 원인과 흐름을 점검함"


def clip(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + ELLIPSIS


def finish_line(text: str) -> str:
    line = normalize(text)
    if not line:
        return ""
    if not line.endswith(LINE_ENDINGS):
        line += "."
    return line


def insufficient_summary(mode: str = "line") -> str:
    if mode == "structured":
        return INSUFFICIENT_STRUCTURED
    return INSUFFICIENT_LINE


def assemble_line(
    primary: str,
    context: Optional[str],
    tags: Sequence[str],
    tuning: AnalyzerTuning = DEFAULT_TUNING,
) -> str:
    parts = [clip(normalize(primary), tuning.primary_clip)]
    if context:
        parts.append("; " + clip(normalize(context), tuning.context_clip))
    if tags:
        parts.append(f" ({tags[0]})")
    return finish_line("".join(parts))


def _emotion_flow(tags: Sequence[str], text: str) -> str:
    if tags:
        return tags[0]
    lowered = text.lower()
    if any(hint in lowered for hint in FRUSTRATION_HINTS):
        return "답답함과 의문이 함께 나타남"
    if any(hint in lowered for hint in ANXIETY_HINTS):
        return "불안과 걱정이 함께 나타남"
    return "감정 표현이 비교적 중립적임"


def assemble_structured(
    primary: str,
    context: Optional[str],
    tags: Sequence[str],
    tuning: AnalyzerTuning = DEFAULT_TUNING,
    source: str = "",
) -> str:
    lines: List[str] = [
        f"1. 핵심 이슈: {clip(normalize(primary), tuning.primary_clip)}",
        f"2. 상황 맥락: {clip(normalize(context or DEFAULT_CONTEXT_LINE), tuning.context_clip)}",
        f"3. 감정 흐름: {_emotion_flow(tags, source or primary)}",
    ]
    return "\n".join(lines)


def assemble(
    primary: str,
    context: Optional[str],
    tags: Sequence[str],
    tuning: AnalyzerTuning = DEFAULT_TUNING,
    source: str = "",
) -> str:
    if tuning.summary_mode == "structured":
        return assemble_structured(primary, context, tags, tuning, source=source)
    return assemble_line(primary, context, tags, tuning)
