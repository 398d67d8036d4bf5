"""Choose between the local analysis and externally generated candidates.

The local heuristic result is always computed first and returned whenever no
external candidate is good enough. External candidates come either from the
caller or from an injected :class:`CandidateProducer`; producer failures are
logged and treated as "no candidates".
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Tuple

from integrations.config import get_config

from .analyzer import analyze_local
from .llm_candidates import LLMCandidateProducer
from .models import CandidateSummary, ReflectionAnalysis
from .normalizer import normalize_list
from .summary import finish_line
from .tokenizer import word_tokens
from .tuning import DEFAULT_TUNING, AnalyzerTuning

logger = logging.getLogger(__name__)


class CandidateProducer(Protocol):
    def produce(self, content: str, mood: Optional[str]) -> Sequence[CandidateSummary]:
        ...


def quality_score(summary: str, source: str, tuning: AnalyzerTuning = DEFAULT_TUNING) -> float:
    summary_tokens = word_tokens(summary or "")
    if not summary_tokens:
        return tuning.empty_candidate_score
    source_tokens = set(word_tokens(source or ""))
    overlap = sum(1 for token in summary_tokens if token in source_tokens)
    overlap_ratio = overlap / len(summary_tokens)
    unique_ratio = len(set(summary_tokens)) / len(summary_tokens)
    repetition_penalty = max(0.0, 1.0 - unique_ratio)
    length_penalty = tuning.overlong_penalty if len(summary) > tuning.max_summary_chars else 0.0
    return (
        overlap_ratio * tuning.overlap_weight
        + unique_ratio * tuning.unique_weight
        - repetition_penalty * tuning.repetition_weight
        - length_penalty
    )


def choose_best(
    candidates: Iterable[CandidateSummary],
    source: str,
    tuning: AnalyzerTuning = DEFAULT_TUNING,
) -> Optional[Tuple[CandidateSummary, float]]:
    best: Optional[Tuple[CandidateSummary, float]] = None
    for candidate in candidates:
        score = quality_score(candidate.summary, source, tuning)
        # strict comparison keeps the first-seen candidate on ties
        if best is None or score > best[1]:
            best = (candidate, score)
    return best


def _coerce_candidates(raw: Iterable[object]) -> List[CandidateSummary]:
    candidates: List[CandidateSummary] = []
    for item in raw:
        if isinstance(item, CandidateSummary):
            candidate = item
        elif isinstance(item, str):
            candidate = CandidateSummary(summary=item)
        elif isinstance(item, dict):
            tags = item.get("emotionTags") or item.get("emotion_tags") or []
            if not isinstance(tags, (list, tuple)):
                tags = []
            candidate = CandidateSummary(
                summary=str(item.get("summary") or ""),
                emotion_tags=tuple(str(t) for t in tags if t is not None),
            )
        else:
            logger.warning("[arbitration] skipping malformed candidate: %r", item)
            continue
        if candidate.summary.strip():
            candidates.append(candidate)
    return candidates


class ReflectionAnalysisService:
    def __init__(
        self,
        producer: Optional[CandidateProducer] = None,
        tuning: AnalyzerTuning = DEFAULT_TUNING,
    ) -> None:
        self.producer = producer
        self.tuning = tuning

    @classmethod
    def from_config(
        cls, cfg: Optional[Dict[str, object]] = None, use_llm: Optional[bool] = None
    ) -> "ReflectionAnalysisService":
        cfg = get_config() if cfg is None else cfg
        tuning = AnalyzerTuning.from_config(cfg)
        enabled = bool(cfg.get("llm_enabled", False)) if use_llm is None else use_llm
        producer = LLMCandidateProducer.from_config(cfg) if enabled else None
        return cls(producer=producer, tuning=tuning)

    def analyze(
        self,
        content: Optional[str],
        mood: Optional[str] = None,
        external_candidates: Optional[Iterable[object]] = None,
    ) -> ReflectionAnalysis:
        source = content or ""
        local = analyze_local(source, mood, self.tuning)
        if not source.strip():
            return local

        if external_candidates is None:
            raw = self._produce(source, mood) if self.producer is not None else []
        else:
            raw = list(external_candidates)
        candidates = _coerce_candidates(raw)
        if not candidates:
            return local
        return self.arbitrate(local, candidates, source)

    def arbitrate(
        self,
        local: ReflectionAnalysis,
        candidates: Sequence[CandidateSummary],
        source: str,
    ) -> ReflectionAnalysis:
        best = choose_best(candidates, source, self.tuning)
        if best is None:
            return local
        candidate, score = best
        if score < self.tuning.min_acceptance_score:
            logger.info("[llm_fallback] best candidate score %.3f below threshold", score)
            return local
        if self.tuning.adoption_margin is not None:
            local_score = quality_score(local.summary, source, self.tuning)
            if score < local_score + self.tuning.adoption_margin:
                logger.info(
                    "[llm_fallback] candidate %.3f does not beat local %.3f by margin",
                    score,
                    local_score,
                )
                return local
        summary = finish_line(candidate.summary)
        tags = normalize_list(candidate.emotion_tags, limit=self.tuning.tag_limit)
        return ReflectionAnalysis(summary=summary, emotion_tags=tuple(tags))

    def _produce(self, content: str, mood: Optional[str]) -> List[CandidateSummary]:
        try:
            return list(self.producer.produce(content, mood))  # type: ignore[union-attr]
        except Exception as exc:
            logger.warning("[llm_fallback] candidate generation failed: %s", exc)
            return []


def analyze(
    content: Optional[str],
    mood: Optional[str] = None,
    external_candidates: Optional[Iterable[object]] = None,
    tuning: AnalyzerTuning = DEFAULT_TUNING,
) -> ReflectionAnalysis:
    return ReflectionAnalysisService(tuning=tuning).analyze(content, mood, external_candidates)
