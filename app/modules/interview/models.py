"""Models for company-specific interview questions."""

from pydantic import BaseModel


class CompanyQuestion(BaseModel):
    """Open interview question paired with a detailed explanation."""

    question: str
    answer: str
