"""Pydantic models for flashcard replies.

Items are checked against these models after extraction from the model
reply. Unknown keys are ignored so chatty replies with extra metadata still
validate.
"""

from pydantic import BaseModel


class Flashcard(BaseModel):
    """Simple question/answer flashcard."""

    question: str
    answer: str
