from app.modules.flashcards.models import Flashcard
from app.modules.generation.fallbacks import fallback_items
from app.modules.generation.models import TaskKind
from app.modules.interview.models import CompanyQuestion
from app.modules.quiz.models import QuizItem


def test_flashcard_fallback_previews_raw_text():
    items = fallback_items(TaskKind.FLASHCARDS, "Rust", "x" * 500)

    assert len(items) == 1
    assert isinstance(items[0], Flashcard)
    assert items[0].question == "What is Rust?"
    assert items[0].answer == "x" * 200 + "..."


def test_flashcard_fallback_without_text_apologises():
    (card,) = fallback_items(TaskKind.FLASHCARDS, "Rust")
    assert card.answer.startswith("Sorry")


def test_quiz_fallback_is_itself_schema_valid():
    (item,) = fallback_items(TaskKind.QUIZ, "Rust", "garbage")

    assert isinstance(item, QuizItem)
    assert item.correct_answer in item.options
    assert len(item.options) == 4


def test_company_fallback():
    (item,) = fallback_items(TaskKind.COMPANY_QUESTIONS, "Acme")
    assert isinstance(item, CompanyQuestion)
    assert "Acme" in item.question


def test_free_text_has_no_placeholder_items():
    assert fallback_items(TaskKind.FREE_TEXT, "anything", "text") == []
