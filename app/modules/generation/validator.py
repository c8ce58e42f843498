"""Shape validation and one-shot repair of model replies.

Models often wrap arrays in prose ("Sure! [...] hope this helps"), so the
widest bracket span is parsed.
``extract_single_json_array`` is the stricter alternative and can be passed
to ``ResponseValidator`` instead.
"""

from __future__ import annotations

import asyncio
import json
import re
from functools import lru_cache
from typing import Any, Callable, Optional, Protocol

from pydantic import TypeAdapter, ValidationError

from app.core.logging import get_logger
from app.modules.generation.errors import ExhaustedRetries
from app.modules.generation.models import (
    ExpectedShape,
    GenerationRequest,
    ModelResponse,
    ShapeKind,
    ValidatedResult,
)
from app.modules.generation.observability import BadResponseLog
from app.modules.generation.prompts import repair_prompt

logger = get_logger(__name__)

VALIDATION_WARNING = "AI output could not be validated; returned raw text."

_ARRAY_SPAN = re.compile(r"\[[\s\S]*\]")
_NUMBERED_LINE = re.compile(r"^\d+\.[\s\-]")

ArrayExtractor = Callable[[str], Optional[list]]


class CompletionClient(Protocol):
    async def complete(self, prompt: str) -> ModelResponse: ...


def extract_json_array(text: Optional[str]) -> Optional[list]:
    """Parse the widest ``[...]`` span in ``text``; None if absent or invalid."""
    if not text or not isinstance(text, str):
        return None
    match = _ARRAY_SPAN.search(text)
    if not match:
        return None
    try:
        parsed = json.loads(match.group(0))
    except ValueError:
        return None
    return parsed if isinstance(parsed, list) else None


def _top_level_spans(text: str) -> int:
    depth = 0
    spans = 0
    in_string = False
    escaped = False
    for ch in text:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"' and depth > 0:
            in_string = True
        elif ch == "[":
            if depth == 0:
                spans += 1
            depth += 1
        elif ch == "]" and depth > 0:
            depth -= 1
    return spans


def extract_single_json_array(text: Optional[str]) -> Optional[list]:
    """Like ``extract_json_array`` but rejects replies with several arrays."""
    if not text or not isinstance(text, str):
        return None
    if _top_level_spans(text) != 1:
        return None
    return extract_json_array(text)


def is_numbered_list(text: Optional[str]) -> bool:
    """True when at least half the non-empty lines look like ``1. item``."""
    if not text or not isinstance(text, str):
        return False
    lines = [line.strip() for line in re.split(r"\r?\n", text)]
    lines = [line for line in lines if line]
    if not lines:
        return False
    numbered = [line for line in lines if _NUMBERED_LINE.match(line)]
    return len(numbered) >= max(1, len(lines) // 2)


@lru_cache(maxsize=None)
def _list_adapter(item_model: type) -> TypeAdapter:
    return TypeAdapter(list[item_model])  # type: ignore[valid-type]


def validate_items(items: list, shape: ExpectedShape) -> Optional[list]:
    """Validate every element against the shape's item model."""
    if shape.item_model is None:
        return list(items)
    adapter = _list_adapter(shape.item_model)
    try:
        return adapter.validate_python(items)
    except ValidationError as e:
        logger.debug(f"Reply failed {shape.item_model.__name__} validation: {e}")
        return None


def check_shape(
    text: Optional[str],
    shape: ExpectedShape,
    extractor: ArrayExtractor = extract_json_array,
) -> tuple[bool, Any]:
    """Return ``(acceptable, payload)`` for ``text`` against ``shape``."""
    if shape.kind == ShapeKind.ANY:
        return True, text or ""
    if shape.kind == ShapeKind.NUMBERED_LIST:
        ok = is_numbered_list(text)
        return ok, (text if ok else None)
    parsed = extractor(text or "")
    if parsed is None:
        return False, None
    items = validate_items(parsed, shape)
    return items is not None, items


class ResponseValidator:
    """Run a request through the client, repairing the reply once if needed."""

    def __init__(
        self,
        client: CompletionClient,
        *,
        bad_responses: Optional[BadResponseLog] = None,
        extractor: ArrayExtractor = extract_json_array,
    ) -> None:
        self.client = client
        self.bad_responses = bad_responses
        self.extractor = extractor

    async def run(self, request: GenerationRequest) -> ValidatedResult:
        shape = request.expected_shape
        first = await self.client.complete(request.prompt)
        ok, payload = check_shape(first.text, shape, self.extractor)
        if ok:
            return ValidatedResult(payload=payload, raw_text=first.text, model_calls=1)

        logger.warning(
            f"{request.task_kind.value} reply failed {shape.kind.value} validation; "
            "retrying with a stricter prompt",
            extra={"task": request.task_kind.value},
        )
        if self.bad_responses is not None:
            await asyncio.to_thread(
                self.bad_responses.record,
                request.task_kind.value,
                request.prompt,
                first.text,
            )

        second = await self._repair(request)
        if second.succeeded:
            ok, payload = check_shape(second.text, shape, self.extractor)
            if ok:
                return ValidatedResult(
                    payload=payload, raw_text=second.text, model_calls=2
                )

        best = second.text if second.text else first.text
        logger.warning(
            f"{request.task_kind.value} reply still invalid after repair; returning raw text",
            extra={"task": request.task_kind.value},
        )
        return ValidatedResult(
            payload=best,
            raw_text=best,
            warning=VALIDATION_WARNING,
            model_calls=2,
        )

    async def _repair(self, request: GenerationRequest) -> ModelResponse:
        prompt = repair_prompt(request.prompt, request.expected_shape)
        try:
            return await self.client.complete(prompt)
        except ExhaustedRetries as e:
            logger.error(
                f"Repair call for {request.task_kind.value} failed: {e}",
                extra={"task": request.task_kind.value},
            )
            return ModelResponse(
                text="",
                succeeded=False,
                attempts=e.attempts,
                last_error_kind=e.error_kind,
            )
