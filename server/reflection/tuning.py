from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

from integrations.config import get_config

SUMMARY_MODES = ("line", "structured")


@dataclass(frozen=True)
class AnalyzerTuning:
    """Empirical scoring constants for the local analyzer and arbitration.

    Values come from hand-tuning on real diary entries. Override them in the
    ``reflection`` block of config.yaml instead of editing the defaults.
    """

    # salience
    edge_bonus: float = 0.5
    length_band_min: int = 16
    length_band_max: int = 80
    length_bonus: float = 0.3
    length_penalty: float = 0.2
    # selection
    context_similarity_threshold: float = 0.72
    # assembly
    primary_clip: int = 72
    context_clip: int = 46
    summary_mode: str = "line"
    tag_limit: int = 3
    # arbitration
    overlap_weight: float = 1.2
    unique_weight: float = 0.4
    repetition_weight: float = 0.4
    max_summary_chars: int = 110
    overlong_penalty: float = 0.25
    empty_candidate_score: float = -999.0
    min_acceptance_score: float = 0.6
    adoption_margin: Optional[float] = None

    def __post_init__(self) -> None:
        if self.summary_mode not in SUMMARY_MODES:
            raise ValueError(f"Unknown summary_mode: {self.summary_mode}")
        if self.tag_limit < 1:
            raise ValueError("tag_limit must be at least 1")

    def with_overrides(self, overrides: Optional[Dict[str, Any]]) -> "AnalyzerTuning":
        if not overrides:
            return self
        known = {f.name: f for f in fields(self)}
        values: Dict[str, Any] = {}
        for key, raw in overrides.items():
            field = known.get(key)
            if field is None:
                raise ValueError(f"Unknown tuning key: {key}")
            values[key] = _coerce(key, raw, getattr(self, key), optional=field.default is None)
        return replace(self, **values)

    @classmethod
    def from_config(cls, cfg: Optional[Dict[str, object]] = None) -> "AnalyzerTuning":
        cfg = get_config() if cfg is None else cfg
        overrides: Dict[str, Any] = {}
        block = cfg.get("reflection")
        if isinstance(block, dict):
            overrides.update(block)
        mode = cfg.get("summary_mode")
        if mode:
            overrides["summary_mode"] = str(mode)
        return cls().with_overrides(overrides)


def _coerce(key: str, raw: Any, current: Any, optional: bool = False) -> Any:
    if raw is None:
        if optional:
            return None
        raise ValueError(f"{key} cannot be empty")
    if isinstance(current, bool):
        return bool(raw)
    if isinstance(current, int):
        return int(raw)
    if isinstance(current, float) or current is None:
        try:
            return float(raw)
        except (TypeError, ValueError):
            raise ValueError(f"Expected a number, got {raw!r}") from None
    return str(raw)


DEFAULT_TUNING = AnalyzerTuning()
