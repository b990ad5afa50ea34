"""Vote-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from question_board.models.vote import VoteValue


class VoteCreate(BaseModel):
    """Schema for casting a vote on a question."""

    question_id: str = Field(..., min_length=1)
    vote: VoteValue = Field(..., description="UPVOTE or DOWNVOTE")


class VoteUpdate(BaseModel):
    """Schema for changing the direction of an existing vote."""

    vote: VoteValue


class VoteResponse(BaseModel):
    """Vote ledger row returned by the API."""

    id: str
    question_id: str
    user_id: str
    vote: VoteValue
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
