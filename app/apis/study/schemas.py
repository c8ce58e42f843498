from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class AskRequest(BaseModel):
    prompt: Optional[str] = Field(default=None, description="Question for the study buddy")


class TopicRequest(BaseModel):
    topic: Optional[str] = Field(default=None, description="Subject to generate material for")


class AskResponse(BaseModel):
    response: str
    warning: Optional[str] = None


class GenerationResponse(BaseModel):
    response: str = Field(..., description="Raw model reply the items came from")
    items: list[dict[str, Any]] = Field(default_factory=list)
    warning: Optional[str] = None
    fallback: bool = False


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    geminiApiConfigured: bool
