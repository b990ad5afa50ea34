# src/question_board/api/v1/endpoints/votes.py
"""Vote-related endpoints for the Question Board API."""

from fastapi import APIRouter, Query, status

from question_board.schemas.vote import VoteCreate, VoteResponse, VoteUpdate
from question_board.services.vote_service import VoteService

from ..dependencies import ContextDep

router = APIRouter(prefix="/votes", tags=["votes"])


@router.get("/", response_model=VoteResponse | None)
async def get_my_vote(
    ctx: ContextDep,
    question_id: str = Query(..., description="Question to look up the caller's vote on"),
) -> VoteResponse | None:
    """Get the current user's vote on a question, or null if they have not voted."""
    vote = VoteService(ctx).get_vote(question_id)
    if vote is None:
        return None
    return VoteResponse.model_validate(vote)


@router.post("/", response_model=VoteResponse, status_code=status.HTTP_201_CREATED)
async def cast_vote(vote_data: VoteCreate, ctx: ContextDep) -> VoteResponse:
    """Cast a vote on a question and update its vote count."""
    vote = VoteService(ctx).create_vote(vote_data.question_id, vote_data.vote)
    return VoteResponse.model_validate(vote)


@router.patch("/{vote_id}", response_model=VoteResponse)
async def update_vote(vote_id: str, vote_data: VoteUpdate, ctx: ContextDep) -> VoteResponse:
    """Flip the direction of one of the current user's votes."""
    vote = VoteService(ctx).update_vote(vote_id, vote_data.vote)
    return VoteResponse.model_validate(vote)


@router.delete("/{vote_id}", response_model=VoteResponse)
async def delete_vote(vote_id: str, ctx: ContextDep) -> VoteResponse:
    """Retract one of the current user's votes."""
    return VoteService(ctx).delete_vote(vote_id)
