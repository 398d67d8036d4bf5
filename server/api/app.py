from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, Optional

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from integrations.config import get_config
from reflection import emotion_stats
from reflection.arbitration import ReflectionAnalysisService
from reflection.classifier import mood_badges
from reflection.normalizer import normalize_all, normalize_list
from reflection.prompts import pick_prompt
from reflection.tuning import AnalyzerTuning


logger = logging.getLogger(__name__)

app = FastAPI(title="Diary Reflection")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

CFG = get_config()

UI_TOKEN: Optional[str] = None
_token_value = os.environ.get("DIARY_UI_TOKEN")
if _token_value and _token_value.strip():
    UI_TOKEN = _token_value.strip()
if not UI_TOKEN:
    cfg_token = CFG.get("ui_token")
    if isinstance(cfg_token, str) and cfg_token.strip():
        UI_TOKEN = cfg_token.strip()

_SERVICE: Optional[ReflectionAnalysisService] = None


def get_service() -> ReflectionAnalysisService:
    global _SERVICE
    if _SERVICE is None:
        try:
            _SERVICE = ReflectionAnalysisService.from_config(CFG)
        except (RuntimeError, ValueError) as exc:
            logger.warning("[llm_fallback] %s; serving local analysis only", exc)
            _SERVICE = ReflectionAnalysisService.from_config(CFG, use_llm=False)
    return _SERVICE


def set_service(service: Optional[ReflectionAnalysisService]) -> None:
    global _SERVICE
    _SERVICE = service


class CandidatePayload(BaseModel):
    summary: str
    emotionTags: list[str] = []


class AnalyzePayload(BaseModel):
    content: str = ""
    mood: Optional[str] = None
    candidates: Optional[list[CandidatePayload]] = None
    token: Optional[str] = None


class TagsPayload(BaseModel):
    tags: list[str]
    limit: Optional[int] = None
    keep_duplicates: bool = False
    token: Optional[str] = None


class StatsPayload(BaseModel):
    entries: list[list[str]]
    limit: int = 5
    token: Optional[str] = None


def _model_dump(payload: BaseModel) -> dict:
    if hasattr(payload, "model_dump"):
        return payload.model_dump()  # type: ignore[call-arg]
    return payload.dict()


def _extract_token(request: Request, payload: Optional[dict] = None) -> Optional[str]:
    header_token = request.headers.get("X-UI-Token")
    if header_token:
        return header_token.strip()
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.lower().startswith("bearer "):
        return auth_header.split(" ", 1)[1].strip()
    if payload and isinstance(payload, dict):
        value = payload.get("token")
        if isinstance(value, str) and value.strip():
            return value.strip()
    token_param = request.query_params.get("token")
    if token_param:
        return token_param.strip()
    return None


def _authorized(request: Request, payload: Optional[dict] = None) -> bool:
    if not UI_TOKEN:
        return True
    token = _extract_token(request, payload)
    return bool(token) and token == UI_TOKEN


def _error(status: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": message})


@app.get("/health")
async def health():
    return {"ok": True}


@app.post("/analyze")
async def analyze(payload: AnalyzePayload, request: Request):
    data = _model_dump(payload)
    if not _authorized(request, data):
        return _error(401, "unauthorized")
    candidates: Optional[list[Any]] = None
    if payload.candidates is not None:
        candidates = [_model_dump(c) for c in payload.candidates]
    service = get_service()
    # LLM-backed producers block on network I/O.
    result = await asyncio.to_thread(service.analyze, payload.content, payload.mood, candidates)
    body = result.to_dict()
    body["moodBadges"] = mood_badges(payload.mood)
    return body


@app.post("/tags/normalize")
async def tags_normalize(payload: TagsPayload, request: Request):
    if not _authorized(request, _model_dump(payload)):
        return _error(401, "unauthorized")
    if payload.keep_duplicates:
        return {"tags": normalize_all(payload.tags)}
    limit = payload.limit if payload.limit is not None else AnalyzerTuning.from_config(CFG).tag_limit
    if limit < 1:
        return _error(400, "limit must be at least 1")
    return {"tags": normalize_list(payload.tags, limit=limit)}


@app.post("/emotions/stats")
async def emotions_stats(payload: StatsPayload, request: Request):
    if not _authorized(request, _model_dump(payload)):
        return _error(401, "unauthorized")
    return emotion_stats.summarize_emotions(payload.entries, limit=payload.limit)


@app.get("/prompt")
async def prompt(request: Request, exclude: Optional[str] = Query(default=None)):
    if not _authorized(request):
        return _error(401, "unauthorized")
    return {"prompt": pick_prompt(excluding=exclude)}
