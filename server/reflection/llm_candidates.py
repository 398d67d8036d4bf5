"""Candidate summaries from an OpenAI-compatible chat model.

The producer only generates candidates; deciding whether to trust them is the
job of :class:`reflection.arbitration.ReflectionAnalysisService`.
"""

from __future__ import annotations

import datetime as dt
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from integrations import llm_client
from integrations.config import get_config

from .models import CandidateSummary

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = "openai"
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_ATTEMPTS = 2
MAX_TAGS = 3

SUMMARY_STYLE = "사실 요약형"
DEFAULT_PROMPT_TEMPLATE = """너는 일기 요약 도우미다.
스타일은 반드시 {{style}}로 고정한다.
입력된 일기를 기반으로 다음 JSON만 출력해라.
규칙:
- summary: 반드시 한 줄. 자연스러운 한국어 문장으로 작성.
- 원문 문장을 그대로 길게 복붙하지 말고 핵심만 압축.
- emotionTags: 감정 태그 0~3개. 없으면 빈 배열.
- 출력은 JSON 객체 하나만.

입력:
mood: {{mood}}
content: {{content}}

JSON 스키마:
{"summary":"string","emotionTags":["string"]}
"""

# Filler the model likes to add that says nothing about the entry.
BANNED_FRAGMENTS = (
    "기록이 짧아요",
    "한 줄만 더",
    "남겨보세요",
    "적어보세요",
    "핵심 흐름을 정리",
    "뚜렷한 감정 키워드 없음",
)


def _load_prompt(path: Optional[Path]) -> Optional[str]:
    if path and path.exists():
        return path.read_text(encoding="utf-8")
    return None


def _render_template(template: str, variables: Dict[str, str]) -> str:
    rendered = template
    for key, value in variables.items():
        rendered = rendered.replace(f"{{{{{key}}}}}", value)
    return rendered


def build_prompt(content: str, mood: Optional[str], template: Optional[str] = None) -> str:
    return _render_template(
        template or DEFAULT_PROMPT_TEMPLATE,
        {"style": SUMMARY_STYLE, "mood": mood or "없음", "content": content},
    )


def extract_json_object(text: Optional[str]) -> Optional[str]:
    if not text:
        return None
    first = text.find("{")
    last = text.rfind("}")
    if first < 0 or last < first:
        return None
    return text[first : last + 1]


def refine_summary(summary: str) -> str:
    line = " ".join(summary.split())
    for fragment in BANNED_FRAGMENTS:
        line = line.replace(fragment, "")
    return " ".join(line.split())


def parse_candidate(raw_text: Optional[str]) -> Optional[CandidateSummary]:
    blob = extract_json_object(raw_text)
    if blob is None:
        return None
    try:
        payload = json.loads(blob)
    except json.JSONDecodeError:
        return None
    if not isinstance(payload, dict):
        return None
    summary = payload.get("summary")
    if not isinstance(summary, str):
        return None
    refined = refine_summary(summary)
    if not refined:
        return None
    raw_tags = payload.get("emotionTags") or []
    if not isinstance(raw_tags, list):
        raw_tags = []
    tags = [str(t).strip() for t in raw_tags if t is not None and str(t).strip()]
    return CandidateSummary(summary=refined, emotion_tags=tuple(tags[:MAX_TAGS]), source="llm")


def _extract_usage(resp: Any) -> Optional[Dict[str, int]]:
    usage = getattr(resp, "usage", None)
    if not usage:
        return None
    data: Dict[str, Any] = usage if isinstance(usage, dict) else {}
    if not data:
        for attr in ("prompt_tokens", "completion_tokens", "total_tokens"):
            value = getattr(usage, attr, None)
            if value is not None:
                data[attr] = value
    result = {
        "input_tokens": data.get("prompt_tokens"),
        "output_tokens": data.get("completion_tokens"),
        "total_tokens": data.get("total_tokens"),
    }
    cleaned = {key: int(value) for key, value in result.items() if value is not None}
    return cleaned or None


def _save_llm_result(root: Path, payload: Dict[str, Any]) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    ts = dt.datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    path = root / f"reflection_{ts}.json"
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return path


class LLMCandidateProducer:
    def __init__(
        self,
        client: Any,
        model: str = DEFAULT_MODEL,
        attempts: int = DEFAULT_ATTEMPTS,
        prompt_template: Optional[str] = None,
        results_dir: Optional[Path] = None,
        provider: str = DEFAULT_PROVIDER,
    ) -> None:
        self.client = client
        self.model = model
        self.attempts = max(1, attempts)
        self.prompt_template = prompt_template
        self.results_dir = results_dir
        self.provider = provider

    @classmethod
    def from_config(cls, cfg: Optional[Dict[str, object]] = None) -> "LLMCandidateProducer":
        cfg = get_config() if cfg is None else cfg
        provider = str(cfg.get("llm_provider") or DEFAULT_PROVIDER)
        model = str(cfg.get("llm_model") or DEFAULT_MODEL)
        timeout_seconds = None
        timeout_raw = cfg.get("llm_timeout_seconds")
        if timeout_raw is not None:
            try:
                timeout_seconds = float(timeout_raw)
            except (TypeError, ValueError):
                timeout_seconds = None
        base_url = cfg.get("llm_base_url")
        client = llm_client.make_client(
            provider,
            timeout_seconds=timeout_seconds,
            base_url=str(base_url) if base_url else None,
        )
        prompt_path = cfg.get("llm_prompt_path")
        template = _load_prompt(Path(str(prompt_path)).expanduser()) if prompt_path else None
        results_dir = cfg.get("llm_results_dir")
        return cls(
            client,
            model=model,
            attempts=int(cfg.get("llm_attempts") or DEFAULT_ATTEMPTS),
            prompt_template=template,
            results_dir=Path(str(results_dir)).expanduser() if results_dir else None,
            provider=provider,
        )

    def produce(self, content: str, mood: Optional[str]) -> List[CandidateSummary]:
        if not content or not content.strip():
            return []
        prompt = build_prompt(content, mood, self.prompt_template)
        candidates: List[CandidateSummary] = []
        raw_outputs: List[Optional[str]] = []
        for _ in range(self.attempts):
            resp = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=0.2,
            )
            usage = _extract_usage(resp)
            if usage:
                logger.info(
                    "[llm] reflection provider=%s model=%s input=%s output=%s total=%s",
                    self.provider,
                    self.model,
                    usage.get("input_tokens"),
                    usage.get("output_tokens"),
                    usage.get("total_tokens"),
                )
            raw_text = resp.choices[0].message.content
            raw_outputs.append(raw_text)
            candidate = parse_candidate(raw_text)
            if candidate is None:
                logger.debug("[llm] discarded undecodable response")
                continue
            candidates.append(candidate)
        if self.results_dir is not None:
            self._save(content, mood, raw_outputs, candidates)
        return candidates

    def _save(
        self,
        content: str,
        mood: Optional[str],
        raw_outputs: List[Optional[str]],
        candidates: List[CandidateSummary],
    ) -> None:
        payload = {
            "type": "reflection",
            "provider": self.provider,
            "model": self.model,
            "inputs": {"content": content, "mood": mood},
            "raw_outputs": raw_outputs,
            "candidates": [
                {"summary": c.summary, "emotionTags": list(c.emotion_tags)} for c in candidates
            ],
        }
        try:
            saved = _save_llm_result(self.results_dir, payload)  # type: ignore[arg-type]
        except OSError as exc:
            logger.warning("[llm] could not save result: %s", exc)
            return
        logger.debug("[llm] saved %s", saved)
