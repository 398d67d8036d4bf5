from __future__ import annotations

import os
from typing import Any

from openai import OpenAI


PROVIDERS = {
    "openai": {
        "base_url": None,
        "api_key_env": "OPENAI_API_KEY",
    },
    "gemini": {
        "base_url": "https://generativelanguage.googleapis.com/v1beta/openai/",
        "api_key_env": "GEMINI_API_KEY",
    },
    "openrouter": {
        "base_url": "https://openrouter.ai/api/v1",
        "api_key_env": "OPENROUTER_API_KEY",
    },
    # Ollama and other local servers accept any key.
    "local": {
        "base_url": "http://localhost:11434/v1",
        "api_key_env": None,
    },
}


def make_client(
    provider: str,
    timeout_seconds: float | None = None,
    max_retries: int | None = None,
    base_url: str | None = None,
) -> Any:
    if provider not in PROVIDERS:
        raise ValueError(f"Unknown provider: {provider}")
    info = PROVIDERS[provider]
    env_name = info["api_key_env"]
    if env_name:
        api_key = os.getenv(env_name)
        if not api_key:
            raise RuntimeError(f"Missing env {env_name}")
    else:
        api_key = "local"
    client_kwargs: dict[str, Any] = {}
    if timeout_seconds is not None:
        client_kwargs["timeout"] = timeout_seconds
    if max_retries is not None:
        client_kwargs["max_retries"] = max_retries
    resolved_url = base_url or info["base_url"]
    if resolved_url:
        return OpenAI(base_url=resolved_url, api_key=api_key, **client_kwargs)
    return OpenAI(api_key=api_key, **client_kwargs)
