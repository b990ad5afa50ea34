"""Question-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from question_board.core.settings import settings
from question_board.db.time import ensure_utc
from question_board.models.question import QuestionType
from question_board.schemas.common import SortOrder, SortType


class QuestionListQuery(BaseModel):
    """Filter, sort and page parameters for question listings.

    Empty filter lists mean "no filter" for that field. Values inside one list
    are OR-ed; different fields are AND-ed and must all hold for the same
    encounter.
    """

    company_names: list[str] = Field(default_factory=list)
    locations: list[str] = Field(default_factory=list)
    roles: list[str] = Field(default_factory=list)
    question_types: list[QuestionType] = Field(default_factory=list)
    start_date: datetime | None = None
    end_date: datetime | None = Field(None, description="Defaults to the current time")
    sort_type: SortType = SortType.NEW
    sort_order: SortOrder = SortOrder.DESC
    limit: int = Field(settings.default_page_size, ge=1, le=settings.max_page_size)
    cursor: str | None = Field(None, description="Opaque cursor from a previous page")

    @field_validator("start_date", "end_date")
    @classmethod
    def _dates_in_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value) if value is not None else None


class AggregatedEncounters(BaseModel):
    """Encounter statistics folded from every sighting of a question."""

    company_counts: dict[str, int]
    location_counts: dict[str, int]
    role_counts: dict[str, int]
    latest_seen_at: datetime


class QuestionResponse(BaseModel):
    """Public view of a question with its aggregated statistics."""

    id: str
    content: str
    type: QuestionType
    num_votes: int
    num_answers: int
    num_comments: int
    received_count: int
    seen_at: datetime
    updated_at: datetime
    user: str
    aggregated_encounters: AggregatedEncounters


class QuestionPage(BaseModel):
    """One page of a question listing."""

    data: list[QuestionResponse]
    next_cursor: str | None = None


class QuestionSummary(BaseModel):
    """Raw stored question row, returned by related-question search and deletion."""

    id: str
    content: str
    question_type: QuestionType
    upvotes: int
    last_seen_at: datetime
    created_at: datetime
    updated_at: datetime
    user_id: str | None

    model_config = ConfigDict(from_attributes=True)


class EncounterCreate(BaseModel):
    """Schema for recording a sighting of a question."""

    company_id: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)
    seen_at: datetime

    @field_validator("seen_at")
    @classmethod
    def _seen_at_in_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class EncounterResponse(BaseModel):
    """Encounter row returned by the API."""

    id: str
    question_id: str
    company_id: str
    location: str
    role: str
    seen_at: datetime
    user_id: str | None

    model_config = ConfigDict(from_attributes=True)


class QuestionCreate(EncounterCreate):
    """Schema for submitting a new question together with its first encounter."""

    content: str = Field(..., min_length=1, max_length=10000)
    question_type: QuestionType


class QuestionUpdate(BaseModel):
    """Schema for editing a question; omitted fields are left unchanged."""

    content: str | None = Field(None, min_length=1, max_length=10000)
    question_type: QuestionType | None = None
