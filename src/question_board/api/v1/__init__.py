"""Version 1 API endpoints."""

from .endpoints import questions_router, votes_router

__all__ = [
    "questions_router",
    "votes_router",
]
