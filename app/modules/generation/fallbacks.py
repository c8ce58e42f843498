"""Placeholder items for callers that need a renderable list no matter what.

The pipeline itself never fabricates items; HTTP handlers and the CLI call
``fallback_items`` when a result came back as warned raw text.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from app.modules.flashcards.models import Flashcard
from app.modules.generation.models import TaskKind
from app.modules.interview.models import CompanyQuestion
from app.modules.quiz.models import QuizItem

RAW_PREVIEW_LIMIT = 200


def fallback_items(
    task_kind: TaskKind, topic: str, raw_text: Optional[str] = None
) -> list[BaseModel]:
    if task_kind == TaskKind.FLASHCARDS:
        if raw_text:
            answer = raw_text[:RAW_PREVIEW_LIMIT] + "..."
        else:
            answer = "Sorry, I could not generate flashcards at this time. Please try again."
        return [Flashcard(question=f"What is {topic}?", answer=answer)]
    if task_kind == TaskKind.QUIZ:
        return [
            QuizItem(
                question=f"What is the most important concept in {topic}?",
                options=["Concept A", "Concept B", "Concept C", "Concept D"],
                correct_answer="Concept A",
                explanation="This is a fallback question. Please try generating the quiz again.",
            )
        ]
    if task_kind == TaskKind.COMPANY_QUESTIONS:
        return [
            CompanyQuestion(
                question=f"What is the most important concept in {topic}?",
                answer="This is a fallback explanation. Please try generating the questions again.",
            )
        ]
    return []
