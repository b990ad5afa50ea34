# src/question_board/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .questions import router as questions_router
from .votes import router as votes_router

__all__ = [
    "questions_router",
    "votes_router",
]
