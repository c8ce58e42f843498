"""Request/response types flowing through the generation pipeline.

All of these are created and discarded within a single call; nothing here is
shared between concurrent requests.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel


class TaskKind(str, Enum):
    FREE_TEXT = "free_text"
    FLASHCARDS = "flashcards"
    QUIZ = "quiz"
    COMPANY_QUESTIONS = "company_questions"
    STEP_LIST = "step_list"


class ShapeKind(str, Enum):
    ANY = "any"
    JSON_ARRAY = "json_array"
    NUMBERED_LIST = "numbered_list"


class ErrorKind(str, Enum):
    TRANSPORT = "transport"
    RATE_LIMIT = "rate_limit"
    MALFORMED_REPLY = "malformed_reply"


@dataclass(frozen=True)
class ExpectedShape:
    """Structural contract a reply has to satisfy.

    ``item_model`` is only set for JSON array shapes; every array element is
    validated against it.
    """

    kind: ShapeKind
    item_model: Optional[type[BaseModel]] = None

    @classmethod
    def any(cls) -> "ExpectedShape":
        return cls(ShapeKind.ANY)

    @classmethod
    def json_array(cls, item_model: type[BaseModel]) -> "ExpectedShape":
        return cls(ShapeKind.JSON_ARRAY, item_model)

    @classmethod
    def numbered_list(cls) -> "ExpectedShape":
        return cls(ShapeKind.NUMBERED_LIST)


@dataclass(frozen=True)
class GenerationRequest:
    task_kind: TaskKind
    topic: str
    prompt: str
    expected_shape: ExpectedShape


@dataclass
class ModelResponse:
    text: str
    succeeded: bool
    attempts: int
    last_error_kind: Optional[ErrorKind] = None


Payload = Union[str, list[Any]]


@dataclass
class ValidatedResult:
    """The only value handed back to callers of the pipeline.

    ``payload`` is either the validated item list or, for free text and
    unvalidated fallbacks, the raw reply string. A non-empty ``warning``
    marks a payload that could not be validated.
    """

    payload: Payload
    raw_text: str
    warning: Optional[str] = None
    model_calls: int = 1

    @property
    def is_structured(self) -> bool:
        return isinstance(self.payload, list)
