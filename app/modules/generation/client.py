"""Resilient client for the Gemini ``generateContent`` endpoint.

One instance wraps one endpoint/key configuration. Retries are bounded by
``max_retries``; rate-limited replies honour ``Retry-After`` when present and
every other failure backs off ``2 ** attempt`` seconds.
"""

from __future__ import annotations

import asyncio
import math
from typing import Any, Awaitable, Callable, Optional

import httpx

from app.core.config import GeminiSettings
from app.core.logging import get_logger
from app.modules.generation.errors import (
    ExhaustedRetries,
    GenerationError,
    MalformedReplyError,
    RateLimitError,
    TransportError,
)
from app.modules.generation.models import ErrorKind, ModelResponse

logger = get_logger(__name__)

SleepFn = Callable[[float], Awaitable[Any]]


def parse_retry_after(value: Optional[str]) -> Optional[float]:
    """Return the ``Retry-After`` delay in seconds, or None if absent/unparseable.

    HTTP-date values are not supported and fall back to exponential backoff.
    """
    if value is None:
        return None
    try:
        seconds = float(value.strip())
    except ValueError:
        return None
    if seconds < 0 or not math.isfinite(seconds):
        return None
    return seconds


def extract_candidate_text(data: Any) -> str:
    """Pull the first candidate's first text part out of a reply body."""
    candidates = data.get("candidates") if isinstance(data, dict) else None
    if not candidates or not isinstance(candidates, list):
        raise MalformedReplyError("Invalid response format from Gemini API: no candidates")
    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not parts or not isinstance(parts, list):
        raise MalformedReplyError("Invalid response format from Gemini API: no content parts")
    for part in parts:
        if isinstance(part, dict) and isinstance(part.get("text"), str):
            return part["text"]
    raise MalformedReplyError("Invalid response format from Gemini API: no text part")


class GeminiClient:
    """Send prompts to Gemini with retry, backoff and rate-limit handling."""

    def __init__(
        self,
        config: GeminiSettings,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self.config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=config.timeout_seconds)
        self._sleep = sleep

    async def __aenter__(self) -> "GeminiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "X-goog-api-key": self.config.api_key or "",
        }

    def _payload(self, prompt: str) -> dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.config.temperature,
                "topK": self.config.top_k,
                "topP": self.config.top_p,
                "maxOutputTokens": self.config.max_output_tokens,
            },
        }

    async def _post_once(self, prompt: str) -> str:
        try:
            response = await self._client.post(
                self.config.api_url,
                json=self._payload(prompt),
                headers=self._headers(),
            )
        except httpx.RequestError as e:
            raise TransportError(f"Request to Gemini API failed: {e!r}") from e

        if response.status_code == 429:
            raise RateLimitError(
                "Gemini API error: 429",
                retry_after=parse_retry_after(response.headers.get("retry-after")),
                body=response.text,
            )
        if not response.is_success:
            raise TransportError(
                f"Gemini API error: {response.status_code} {response.text[:200]}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedReplyError("Gemini API returned a non-JSON body") from e
        return extract_candidate_text(data)

    @staticmethod
    def retry_delay(error: GenerationError, attempt: int) -> float:
        if isinstance(error, RateLimitError) and error.retry_after is not None:
            return error.retry_after
        return float(2**attempt)

    async def complete(self, prompt: str) -> ModelResponse:
        """Call the endpoint until it yields text or the retry budget is spent.

        Raises ``ExhaustedRetries`` after ``max_retries + 1`` failed calls.
        """
        attempt = 0
        last_kind: Optional[ErrorKind] = None
        while True:
            try:
                text = await self._post_once(prompt)
            except GenerationError as exc:
                last_kind = exc.kind
                if attempt >= self.config.max_retries:
                    logger.error(
                        f"Gemini call failed after {attempt + 1} attempts ({exc.kind.value}): {exc}"
                    )
                    raise ExhaustedRetries(exc, attempts=attempt + 1) from exc
                delay = self.retry_delay(exc, attempt)
                logger.warning(
                    f"Gemini {exc.kind.value} error, retrying in {delay:.2f}s "
                    f"(attempt {attempt + 1}/{self.config.max_retries + 1}): {exc}",
                    extra={"attempt": attempt + 1},
                )
                await self._sleep(delay)
                attempt += 1
                continue
            return ModelResponse(
                text=text,
                succeeded=True,
                attempts=attempt + 1,
                last_error_kind=last_kind,
            )

    async def generate(self, prompt: str) -> str:
        return (await self.complete(prompt)).text
