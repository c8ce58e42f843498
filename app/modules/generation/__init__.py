"""Resilient Gemini generation pipeline exports."""

from .client import GeminiClient
from .errors import (
    ExhaustedRetries,
    GenerationError,
    MalformedReplyError,
    RateLimitError,
    TransportError,
)
from .models import (
    ErrorKind,
    ExpectedShape,
    GenerationRequest,
    ModelResponse,
    ShapeKind,
    TaskKind,
    ValidatedResult,
)
from .pipeline import GenerationPipeline, build_pipeline
from .validator import ResponseValidator, extract_json_array, is_numbered_list

__all__ = [
    "GeminiClient",
    "ExhaustedRetries",
    "GenerationError",
    "MalformedReplyError",
    "RateLimitError",
    "TransportError",
    "ErrorKind",
    "ExpectedShape",
    "GenerationRequest",
    "ModelResponse",
    "ShapeKind",
    "TaskKind",
    "ValidatedResult",
    "GenerationPipeline",
    "build_pipeline",
    "ResponseValidator",
    "extract_json_array",
    "is_numbered_list",
]
