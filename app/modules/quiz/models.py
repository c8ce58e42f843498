"""Pydantic models for multiple-choice quiz replies.

Wire keys stay camelCase (``correctAnswer``) since that is what the prompt
asks the model to emit and what the frontend consumes.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

QUIZ_OPTION_COUNT = 4


class QuizItem(BaseModel):
    """A single multiple-choice question with exactly four options."""

    model_config = ConfigDict(populate_by_name=True)

    question: str
    options: list[str] = Field(
        min_length=QUIZ_OPTION_COUNT, max_length=QUIZ_OPTION_COUNT
    )
    correct_answer: str = Field(alias="correctAnswer")
    explanation: str

    @model_validator(mode="after")
    def _answer_is_an_option(self) -> "QuizItem":
        if self.correct_answer not in self.options:
            raise ValueError("correctAnswer must match one of the options exactly")
        return self
