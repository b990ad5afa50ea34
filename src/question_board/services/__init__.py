# src/question_board/services/__init__.py
"""Business logic services for the Question Board application."""

from .context import RequestContext
from .question_service import QuestionService
from .vote_service import VoteService

__all__ = [
    "QuestionService",
    "RequestContext",
    "VoteService",
]
