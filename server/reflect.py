#!/usr/bin/env python3
"""Analyze a diary entry from the command line.

Examples:
  python reflect.py --text "오늘은 산책을 했다. 마음이 편안했다." --mood 😊
  python reflect.py --file entry.txt --llm --json
  python reflect.py --prompt --exclude "오늘의 나를 한 문장으로 칭찬한다면?"
  python reflect.py --serve --port 8001

LLM candidates need llm_provider/llm_model in config.yaml and the provider's
API key in the environment; without them the local analysis is used.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

from integrations.config import get_config
from reflection.arbitration import ReflectionAnalysisService
from reflection.prompts import pick_prompt


def parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Summarize a diary entry and tag its emotions.")
    parser.add_argument("--text", type=str, help="Diary text")
    parser.add_argument("--file", type=Path, help="Read diary text from file ('-' for stdin)")
    parser.add_argument("--mood", type=str, help="Mood marker, e.g. 😊 or tired")
    parser.add_argument("--llm", action="store_true", help="Ask the configured LLM for candidates")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of plain text")
    parser.add_argument("--prompt", action="store_true", help="Print a reflection question and exit")
    parser.add_argument("--exclude", type=str, help="With --prompt: avoid this question")
    parser.add_argument("--config", type=Path, help="Path to config.yaml")
    parser.add_argument("--serve", action="store_true", help="Run the HTTP API")
    parser.add_argument("--host", type=str, default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8001)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def _read_content(args: argparse.Namespace) -> str:
    if args.text is not None:
        return args.text
    if args.file is not None:
        if str(args.file) == "-":
            return sys.stdin.read()
        return args.file.read_text(encoding="utf-8")
    return ""


def main(argv: List[str]) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s %(message)s",
    )
    cfg = get_config(args.config)

    if args.prompt:
        print(pick_prompt(excluding=args.exclude))
        return 0

    if args.serve:
        import uvicorn

        uvicorn.run("api.app:app", host=args.host, port=args.port)
        return 0

    if args.file is not None and str(args.file) != "-" and not args.file.exists():
        print(f"File not found: {args.file}", file=sys.stderr)
        return 2

    content = _read_content(args)
    try:
        service = ReflectionAnalysisService.from_config(cfg, use_llm=args.llm)
    except (RuntimeError, ValueError) as exc:
        print(f"[llm_fallback] {exc}", file=sys.stderr)
        service = ReflectionAnalysisService.from_config(cfg, use_llm=False)

    result = service.analyze(content, args.mood)
    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(result.summary)
        if result.emotion_tags:
            print("감정: " + ", ".join(result.emotion_tags))
    return 0


def _console_main() -> int:
    return main(sys.argv[1:])


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
