from __future__ import annotations

from typing import AbstractSet, Optional, Sequence, Tuple

from .tokenizer import normalize, word_tokens
from .tuning import DEFAULT_TUNING, AnalyzerTuning


def jaccard(a: AbstractSet[str], b: AbstractSet[str]) -> float:
    if not a and not b:
        return 1.0
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def choose_primary(
    sentences: Sequence[str], ranking: Sequence[int], source: str
) -> Tuple[Optional[int], str]:
    if not sentences or not ranking:
        return None, normalize(source)
    best = ranking[0]
    return best, sentences[best]


def choose_context(
    sentences: Sequence[str],
    ranking: Sequence[int],
    primary_index: Optional[int],
    tuning: AnalyzerTuning = DEFAULT_TUNING,
) -> Optional[str]:
    if primary_index is None or len(sentences) < 2:
        return None
    primary_tokens = set(word_tokens(sentences[primary_index]))
    for index in ranking:
        if index == primary_index:
            continue
        candidate_tokens = set(word_tokens(sentences[index]))
        if jaccard(primary_tokens, candidate_tokens) < tuning.context_similarity_threshold:
            return sentences[index]
    for index, sentence in enumerate(sentences):
        if index != primary_index:
            return sentence
    return None
