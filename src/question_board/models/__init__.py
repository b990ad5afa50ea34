# src/question_board/models/__init__.py
"""SQLAlchemy models for the Question Board application."""

from .company import Company
from .question import (
    Question,
    QuestionAnswer,
    QuestionComment,
    QuestionEncounter,
    QuestionType,
)
from .user import User
from .vote import QuestionVote, VoteValue

__all__ = [
    "Company",
    "Question", "QuestionAnswer", "QuestionComment", "QuestionEncounter", "QuestionType",
    "User",
    "QuestionVote", "VoteValue",
]
