"""Flashcards module exports."""

from .models.flashcards import Flashcard

__all__ = ["Flashcard"]
