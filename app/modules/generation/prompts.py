"""Prompt construction for every generation task.

Each builder embeds the topic, the number of items to request, the exact
reply structure, and an instruction to emit only that structure. The
returned ``GenerationRequest`` carries the shape the validator checks the
reply against.
"""

from __future__ import annotations

import re

from app.modules.flashcards.models import Flashcard
from app.modules.generation.models import (
    ExpectedShape,
    GenerationRequest,
    ShapeKind,
    TaskKind,
)
from app.modules.interview.models import CompanyQuestion
from app.modules.quiz.models import QuizItem

FLASHCARD_COUNT = 6
QUIZ_QUESTION_COUNT = 5
COMPANY_QUESTION_COUNT = "100+"

STEP_PATTERN = re.compile(r"step|steps|step-by-step|stepwise|procedure", re.IGNORECASE)

RAW_ARRAY_ONLY = (
    "IMPORTANT: Return ONLY the JSON array, with no surrounding backticks, "
    "commentary, or numbered lists - just the raw JSON array."
)


def _flashcards_prompt(topic: str) -> str:
    return (
        f'Generate {FLASHCARD_COUNT} educational flashcards for the topic: "{topic}".\n\n'
        'Format your response as a valid JSON array of objects, where each object has '
        '"question" and "answer" properties. Make sure the questions are clear and the '
        "answers are informative but concise.\n\n"
        f"{RAW_ARRAY_ONLY}\n\n"
        "Example format:\n"
        "[\n"
        "  {\n"
        '    "question": "What is the main concept?",\n'
        '    "answer": "The main concept is..."\n'
        "  }\n"
        "]\n\n"
        f"Topic: {topic}"
    )


def _quiz_prompt(topic: str) -> str:
    return (
        f"Generate {QUIZ_QUESTION_COUNT} multiple choice quiz questions for the topic: "
        f'"{topic}".\n\n'
        "Format your response as a valid JSON array of objects, where each object has:\n"
        '- "question": the quiz question\n'
        '- "options": array of 4 possible answers\n'
        '- "correctAnswer": the correct answer (must match one of the options exactly)\n'
        '- "explanation": brief explanation of why the answer is correct\n\n'
        "Return ONLY the JSON array, no additional text or formatting.\n\n"
        "Example format:\n"
        "[\n"
        "  {\n"
        '    "question": "What is...?",\n'
        '    "options": ["Option A", "Option B", "Option C", "Option D"],\n'
        '    "correctAnswer": "Option B",\n'
        '    "explanation": "Option B is correct because..."\n'
        "  }\n"
        "]\n\n"
        f"Topic: {topic}\n\n"
        "IMPORTANT: Return ONLY the JSON array, with no extra text, numbered lists, or "
        "markdown. Use the exact keys shown in the example."
    )


def _company_questions_prompt(topic: str) -> str:
    return (
        f"Generate {COMPANY_QUESTION_COUNT} company-specific interview questions with "
        f'detailed explanations for the topic: "{topic}".\n\n'
        "Format your response as a valid JSON array of objects, where each object has:\n"
        '- "question": the interview question\n'
        '- "answer": the detailed explanation for the question\n\n'
        f"{RAW_ARRAY_ONLY}\n\n"
        "Example format:\n"
        "[\n"
        "  {\n"
        '    "question": "What is...?",\n'
        '    "answer": "This is the detailed explanation for the question."\n'
        "  }\n"
        "]\n\n"
        f"Topic: {topic}"
    )


def _free_text_prompt(question: str) -> str:
    return (
        "You are a helpful study buddy AI. Answer the following question in a clear, "
        "educational way:\n\n"
        f"Question: {question}\n\n"
        "Please provide a comprehensive but concise answer that helps the user learn."
    )


def _step_list_prompt(question: str) -> str:
    return (
        f"{_free_text_prompt(question)}\n\n"
        "When you provide step-by-step instructions, return them as a numbered Markdown "
        "list (\n1. Step one\n2. Step two\n) with a blank line between items. "
        "Do not include extra commentary."
    )


_BUILDERS = {
    TaskKind.FREE_TEXT: (_free_text_prompt, ExpectedShape.any()),
    TaskKind.STEP_LIST: (_step_list_prompt, ExpectedShape.numbered_list()),
    TaskKind.FLASHCARDS: (_flashcards_prompt, ExpectedShape.json_array(Flashcard)),
    TaskKind.QUIZ: (_quiz_prompt, ExpectedShape.json_array(QuizItem)),
    TaskKind.COMPANY_QUESTIONS: (
        _company_questions_prompt,
        ExpectedShape.json_array(CompanyQuestion),
    ),
}


def is_step_request(text: str) -> bool:
    return bool(STEP_PATTERN.search(text or ""))


def build_prompt(task_kind: TaskKind, topic: str) -> str:
    return build_request(task_kind, topic).prompt


def build_request(task_kind: TaskKind, topic: str) -> GenerationRequest:
    """Build the prompt and expected reply shape for ``task_kind``.

    Raises ``ValueError`` for an empty topic; HTTP handlers reject those
    before getting here.
    """
    topic = (topic or "").strip()
    if not topic:
        raise ValueError("topic must not be empty")
    builder, shape = _BUILDERS[TaskKind(task_kind)]
    return GenerationRequest(
        task_kind=TaskKind(task_kind),
        topic=topic,
        prompt=builder(topic),
        expected_shape=shape,
    )


def build_ask_request(question: str) -> GenerationRequest:
    """Free-text ask; step-by-step questions expect a numbered list."""
    kind = TaskKind.STEP_LIST if is_step_request(question) else TaskKind.FREE_TEXT
    return build_request(kind, question)


def repair_prompt(prompt: str, shape: ExpectedShape) -> str:
    """Append a shape-specific corrective instruction for the repair call."""
    if shape.kind == ShapeKind.JSON_ARRAY:
        return (
            f"{prompt}\n\nIMPORTANT: Return ONLY the raw JSON array exactly as shown in "
            "the example. Do not include any surrounding backticks, commentary, or "
            "numbered lists. If you cannot, reply with an empty array []."
        )
    if shape.kind == ShapeKind.NUMBERED_LIST:
        return (
            f"{prompt}\n\nIMPORTANT: When providing step-by-step instructions, return a "
            "numbered Markdown list (example:\n1. Step one\n2. Step two). Do not add "
            "extra commentary or code fences. Return only the list."
        )
    return f"{prompt}\n\nPlease respond concisely and avoid extra commentary."
