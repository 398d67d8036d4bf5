from __future__ import annotations

from collections import Counter
from typing import Dict, List, Mapping, Sequence

from .tokenizer import normalize, word_tokens
from .tuning import DEFAULT_TUNING, AnalyzerTuning


def keyword_weights(text: str) -> Dict[str, float]:
    counts = Counter(word_tokens(normalize(text)))
    return {token: float(count) for token, count in counts.items()}


def score_sentence(
    sentence: str,
    index: int,
    total: int,
    weights: Mapping[str, float],
    tuning: AnalyzerTuning = DEFAULT_TUNING,
) -> float:
    tokens = word_tokens(sentence)
    if not tokens:
        return 0.0
    score = sum(weights.get(token, 0.0) for token in tokens)
    score += len(set(tokens)) / len(tokens)
    if index == 0 or index == total - 1:
        score += tuning.edge_bonus
    length = len(sentence)
    if tuning.length_band_min <= length <= tuning.length_band_max:
        score += tuning.length_bonus
    else:
        score -= tuning.length_penalty
    return score


def rank_sentences(
    sentences: Sequence[str],
    weights: Mapping[str, float],
    tuning: AnalyzerTuning = DEFAULT_TUNING,
) -> List[int]:
    """Return sentence indexes best-first.

    Sentences without meaningful tokens always sort after the rest; ties keep
    their original order.
    """
    total = len(sentences)
    keyed = []
    for index, sentence in enumerate(sentences):
        has_tokens = bool(word_tokens(sentence))
        score = score_sentence(sentence, index, total, weights, tuning)
        keyed.append((not has_tokens, -score, index))
    keyed.sort()
    return [index for _, _, index in keyed]
