"""Local, deterministic reflection analysis.

Pipeline: normalize -> split sentences -> weight keywords -> rank sentences
-> pick a primary and a dissimilar context sentence -> classify emotions
-> assemble the summary. No I/O and no randomness, so the result doubles as
the guaranteed fallback for :mod:`reflection.arbitration`.
"""

from __future__ import annotations

from typing import Optional

from . import classifier, salience, selector, summary
from .models import ReflectionAnalysis
from .normalizer import normalize_list
from .tokenizer import extract_sentences, normalize
from .tuning import DEFAULT_TUNING, AnalyzerTuning


def analyze_local(
    content: Optional[str],
    mood: Optional[str] = None,
    tuning: AnalyzerTuning = DEFAULT_TUNING,
) -> ReflectionAnalysis:
    cleaned = normalize(content or "")
    if not cleaned:
        return ReflectionAnalysis(summary=summary.insufficient_summary(tuning.summary_mode))

    sentences = extract_sentences(content or "")
    weights = salience.keyword_weights(cleaned)
    ranking = salience.rank_sentences(sentences, weights, tuning)
    primary_index, primary = selector.choose_primary(sentences, ranking, cleaned)
    context = selector.choose_context(sentences, ranking, primary_index, tuning)

    tags = normalize_list(classifier.classify(cleaned, mood), limit=tuning.tag_limit)
    text = summary.assemble(primary, context, tags, tuning, source=cleaned)
    return ReflectionAnalysis(summary=text, emotion_tags=tuple(tags))
