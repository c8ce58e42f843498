# tests/conftest.py
import os

# Placeholder secrets so settings load without a real .env
os.environ.setdefault("GEMINI_API_KEY", "test-key")

import pytest

from app.modules.generation.models import ModelResponse


class FakeClient:
    """Stands in for GeminiClient; replies are strings or exceptions to raise."""

    def __init__(self, replies):
        self.replies = list(replies)
        self.prompts: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    async def complete(self, prompt: str) -> ModelResponse:
        self.prompts.append(prompt)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return ModelResponse(text=reply, succeeded=True, attempts=1)


@pytest.fixture
def make_client():
    return FakeClient


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def record_sleep(sleeps):
    async def _sleep(delay: float) -> None:
        sleeps.append(delay)

    return _sleep
