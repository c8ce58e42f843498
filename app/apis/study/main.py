from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from app.apis.deps import get_pipeline
from app.core.config import settings
from app.core.logging import get_logger
from app.modules.generation.errors import ExhaustedRetries
from app.modules.generation.fallbacks import fallback_items
from app.modules.generation.models import TaskKind, ValidatedResult
from app.modules.generation.pipeline import GenerationPipeline
from .schemas import (
    AskRequest,
    AskResponse,
    GenerationResponse,
    HealthResponse,
    TopicRequest,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api")


def _require(value: str | None, label: str) -> str:
    if not value or not value.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=f"{label} is required"
        )
    return value.strip()


def _failure(message: str, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": message, "details": str(exc)},
    )


def _to_response(
    result: ValidatedResult, kind: TaskKind, topic: str
) -> GenerationResponse:
    if result.is_structured:
        items = [item.model_dump(by_alias=True) for item in result.payload]
        return GenerationResponse(response=result.raw_text, items=items)
    placeholders = fallback_items(kind, topic, result.raw_text)
    return GenerationResponse(
        response=result.raw_text,
        items=[item.model_dump(by_alias=True) for item in placeholders],
        warning=result.warning,
        fallback=True,
    )


async def _generate(
    pipeline: GenerationPipeline,
    kind: TaskKind,
    req: TopicRequest,
    failure_message: str,
) -> GenerationResponse | JSONResponse:
    topic = _require(req.topic, "Topic")
    try:
        result = await pipeline.generate(kind, topic)
    except ExhaustedRetries as e:
        logger.error(f"{kind.value} generation failed: {e}", extra={"task": kind.value})
        return _failure(failure_message, e)
    return _to_response(result, kind, topic)


@router.post("/ask", response_model=AskResponse, tags=["study"])
async def ask(
    req: AskRequest, pipeline: GenerationPipeline = Depends(get_pipeline)
) -> AskResponse | JSONResponse:
    question = _require(req.prompt, "Prompt")
    try:
        result = await pipeline.ask(question)
    except ExhaustedRetries as e:
        logger.error(f"ask failed: {e}", extra={"task": TaskKind.FREE_TEXT.value})
        return _failure("Failed to get AI response", e)
    return AskResponse(response=result.payload, warning=result.warning)


@router.post("/flashcards", response_model=GenerationResponse, tags=["study"])
async def flashcards(
    req: TopicRequest, pipeline: GenerationPipeline = Depends(get_pipeline)
) -> GenerationResponse | JSONResponse:
    return await _generate(
        pipeline, TaskKind.FLASHCARDS, req, "Failed to generate flashcards"
    )


@router.post("/quiz", response_model=GenerationResponse, tags=["study"])
async def quiz(
    req: TopicRequest, pipeline: GenerationPipeline = Depends(get_pipeline)
) -> GenerationResponse | JSONResponse:
    return await _generate(pipeline, TaskKind.QUIZ, req, "Failed to generate quiz")


@router.post(
    "/company-questions", response_model=GenerationResponse, tags=["study"]
)
async def company_questions(
    req: TopicRequest, pipeline: GenerationPipeline = Depends(get_pipeline)
) -> GenerationResponse | JSONResponse:
    return await _generate(
        pipeline,
        TaskKind.COMPANY_QUESTIONS,
        req,
        "Failed to generate company-specific questions",
    )


@router.get("/health", response_model=HealthResponse, tags=["study"])
async def health() -> HealthResponse:
    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc).isoformat(),
        geminiApiConfigured=bool(settings.gemini.is_configured),
    )
