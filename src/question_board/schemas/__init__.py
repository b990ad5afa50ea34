# src/question_board/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import NewCursor, SortOrder, SortType, TopCursor
from .question import (
    AggregatedEncounters,
    EncounterCreate,
    EncounterResponse,
    QuestionCreate,
    QuestionListQuery,
    QuestionPage,
    QuestionResponse,
    QuestionSummary,
    QuestionUpdate,
)
from .vote import VoteCreate, VoteResponse, VoteUpdate

__all__ = [
    "NewCursor", "SortOrder", "SortType", "TopCursor",
    "AggregatedEncounters", "EncounterCreate", "EncounterResponse", "QuestionCreate", "QuestionListQuery",
    "QuestionPage", "QuestionResponse", "QuestionSummary", "QuestionUpdate",
    "VoteCreate", "VoteResponse", "VoteUpdate",
]
