from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path

from app.core.config import settings
from app.core.logging import setup_logging
from app.modules.generation.errors import ExhaustedRetries
from app.modules.generation.fallbacks import fallback_items
from app.modules.generation.models import TaskKind, ValidatedResult
from app.modules.generation.pipeline import GenerationPipeline, build_pipeline

_TASKS = {
    "flashcards": TaskKind.FLASHCARDS,
    "quiz": TaskKind.QUIZ,
    "company": TaskKind.COMPANY_QUESTIONS,
}


def _load_text(args: argparse.Namespace) -> str:
    if args.text and args.file:
        raise SystemExit("Provide either a text argument or --file, not both")
    if args.file:
        return Path(args.file).read_text(encoding="utf-8")
    if args.text:
        return args.text
    raise SystemExit("A topic/question or --file is required")


def to_jsonable(result: ValidatedResult) -> dict:
    out: dict = {"warning": result.warning, "model_calls": result.model_calls}
    if isinstance(result.payload, list):
        out["items"] = [item.model_dump(by_alias=True) for item in result.payload]
    else:
        out["response"] = result.payload
    return out


async def _run(pipeline: GenerationPipeline, cmd: str, text: str, use_fallback: bool) -> dict:
    try:
        if cmd == "ask":
            return to_jsonable(await pipeline.ask(text))
        kind = _TASKS[cmd]
        result = await pipeline.generate(kind, text)
        out = to_jsonable(result)
        if use_fallback and not result.is_structured:
            out["items"] = [
                item.model_dump(by_alias=True)
                for item in fallback_items(kind, text.strip(), result.raw_text)
            ]
            out["fallback"] = True
        return out
    finally:
        await pipeline.aclose()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="study-gen", description="Generate study material with Gemini"
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    for name, help_text in (
        ("ask", "Ask a free-text question"),
        ("flashcards", "Generate flashcards for a topic"),
        ("quiz", "Generate a multiple-choice quiz for a topic"),
        ("company", "Generate company interview questions for a topic"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("text", nargs="?", help="Topic or question (text)")
        p.add_argument("--file", help="Path to a file containing the topic/question")
        if name != "ask":
            p.add_argument(
                "--fallback",
                action="store_true",
                help="Emit placeholder items when the reply cannot be validated",
            )

    args = parser.parse_args(argv)
    setup_logging(settings.observability.log_level)
    text = _load_text(args)
    if not text.strip():
        raise SystemExit("Topic/question must not be empty")

    pipeline = build_pipeline(settings)
    try:
        out = asyncio.run(
            _run(pipeline, args.cmd, text, getattr(args, "fallback", False))
        )
    except ExhaustedRetries as e:
        print(json.dumps({"error": "Failed to get AI response", "details": str(e)}, indent=2))
        return 1
    print(json.dumps(out, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
