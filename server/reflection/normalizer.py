from __future__ import annotations

from typing import Iterable, List, Optional

from .rules import NEUTRAL_TAGS, TAG_SYNONYMS


def normalize_tag(tag: Optional[str]) -> Optional[str]:
    if tag is None:
        return None
    value = str(tag).strip()
    if not value:
        return None
    key = value.lower()
    if key in NEUTRAL_TAGS:
        return None
    # Unknown labels (e.g. free-form model output) are kept as written.
    return TAG_SYNONYMS.get(key, value)


def normalize_list(tags: Iterable[Optional[str]], limit: int = 3) -> List[str]:
    seen = set()
    result: List[str] = []
    if limit <= 0:
        return result
    for tag in tags:
        normalized = normalize_tag(tag)
        if normalized is None:
            continue
        identity = normalized.casefold()
        if identity in seen:
            continue
        seen.add(identity)
        result.append(normalized)
        if len(result) >= limit:
            break
    return result


def normalize_all(tags: Iterable[Optional[str]]) -> List[str]:
    """Normalize without deduplicating, for callers that tally frequencies."""
    result = []
    for tag in tags:
        normalized = normalize_tag(tag)
        if normalized is not None:
            result.append(normalized)
    return result
