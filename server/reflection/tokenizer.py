from __future__ import annotations

import re
from typing import List

from .rules import STOPWORDS

TERMINALS = ".!?。！？"

_WHITESPACE_RE = re.compile(r"\s+")
# Full-width terminals always end a sentence. ASCII ones need whitespace or a
# following non-Latin letter ("길었다.저녁엔"), so "3.5" and "example.com" stay whole.
_SENTENCE_BOUNDARY_RE = re.compile(
    r"(?<=[。！？])\s*|(?<=[.!?])\s+|(?<=[.!?])(?=[^\W\d_a-zA-Z])|\n+"
)
_HARD_SPLIT_RE = re.compile(r"[.!?。！？\n]+")
_WORD_SPLIT_RE = re.compile(r"[\W_]+")


def normalize(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text or "").strip()


def _clean_piece(piece: str) -> str:
    return piece.strip().rstrip(TERMINALS).strip()


def extract_sentences(text: str) -> List[str]:
    if not text or not text.strip():
        return []
    sentences = [_clean_piece(p) for p in _SENTENCE_BOUNDARY_RE.split(text.strip())]
    sentences = [s for s in sentences if s]
    if sentences:
        return [normalize(s) for s in sentences]
    pieces = [_clean_piece(p) for p in _HARD_SPLIT_RE.split(text)]
    return [normalize(p) for p in pieces if p]


def _is_meaningful(token: str) -> bool:
    if len(token) < 2 or token.isdigit():
        return False
    if not any(ch.isalpha() for ch in token):
        return False
    return token not in STOPWORDS


def word_tokens(text: str) -> List[str]:
    if not text:
        return []
    tokens = (t.lower() for t in _WORD_SPLIT_RE.split(text) if t)
    return [t for t in tokens if _is_meaningful(t)]
