from .models import QUIZ_OPTION_COUNT, QuizItem

__all__ = ["QUIZ_OPTION_COUNT", "QuizItem"]
