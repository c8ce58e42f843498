"""Errors raised by the Gemini model client."""

from __future__ import annotations

from typing import Optional

from app.modules.generation.models import ErrorKind


class GenerationError(Exception):
    """Base class for model-call failures."""

    kind: ErrorKind = ErrorKind.TRANSPORT


class TransportError(GenerationError):
    """Network failure or non-2xx status from the generation endpoint."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        body: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class RateLimitError(TransportError):
    """HTTP 429; ``retry_after`` holds the server-directed delay in seconds."""

    kind = ErrorKind.RATE_LIMIT

    def __init__(
        self,
        message: str,
        *,
        retry_after: Optional[float] = None,
        body: str = "",
    ) -> None:
        super().__init__(message, status_code=429, body=body)
        self.retry_after = retry_after


class MalformedReplyError(GenerationError):
    """2xx reply without a ``candidates[0].content.parts[0].text`` value."""

    kind = ErrorKind.MALFORMED_REPLY


class ExhaustedRetries(GenerationError):
    """All attempts were spent; ``last_error`` is the final underlying failure."""

    def __init__(self, last_error: GenerationError, attempts: int) -> None:
        super().__init__(f"Gemini API call failed after {attempts} attempts: {last_error}")
        self.last_error = last_error
        self.attempts = attempts

    @property
    def error_kind(self) -> ErrorKind:
        return self.last_error.kind
