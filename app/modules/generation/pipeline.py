"""Prompt builder, model client and validator wired into one entry point."""

from __future__ import annotations

from typing import Optional

from app.core.config import Settings
from app.core.logging import get_logger
from app.modules.chat.formatting import clean_numbered_steps
from app.modules.generation.client import GeminiClient
from app.modules.generation.models import TaskKind, ValidatedResult
from app.modules.generation.observability import BadResponseLog
from app.modules.generation.prompts import build_ask_request, build_request
from app.modules.generation.validator import CompletionClient, ResponseValidator

logger = get_logger(__name__)


class GenerationPipeline:
    """Turn a topic or question into validated structured output.

    Stateless apart from its collaborators, so one instance can serve
    concurrent requests.
    """

    def __init__(
        self,
        client: CompletionClient,
        *,
        bad_responses: Optional[BadResponseLog] = None,
    ) -> None:
        self.client = client
        self.validator = ResponseValidator(client, bad_responses=bad_responses)

    async def generate(self, task_kind: TaskKind, topic: str) -> ValidatedResult:
        request = build_request(task_kind, topic)
        logger.info(
            f"Generating {request.task_kind.value} for: {request.topic[:80]}",
            extra={"task": request.task_kind.value},
        )
        return await self.validator.run(request)

    async def ask(self, question: str) -> ValidatedResult:
        request = build_ask_request(question)
        result = await self.validator.run(request)
        # Numbered lists that passed validation are returned as written
        if (
            request.task_kind == TaskKind.FREE_TEXT
            and not result.warning
            and isinstance(result.payload, str)
        ):
            result.payload = clean_numbered_steps(result.payload)
        return result

    async def flashcards(self, topic: str) -> ValidatedResult:
        return await self.generate(TaskKind.FLASHCARDS, topic)

    async def quiz(self, topic: str) -> ValidatedResult:
        return await self.generate(TaskKind.QUIZ, topic)

    async def company_questions(self, topic: str) -> ValidatedResult:
        return await self.generate(TaskKind.COMPANY_QUESTIONS, topic)

    async def aclose(self) -> None:
        close = getattr(self.client, "aclose", None)
        if close is not None:
            await close()


def build_pipeline(settings: Settings) -> GenerationPipeline:
    client = GeminiClient(settings.gemini)
    return GenerationPipeline(
        client,
        bad_responses=BadResponseLog(settings.observability.bad_responses_log),
    )
