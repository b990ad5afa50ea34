"""Data access layer for questions and votes."""

from .question_repo import QuestionRecord, QuestionRepository
from .vote_repo import VoteRepository

__all__ = ["QuestionRecord", "QuestionRepository", "VoteRepository"]
