# src/question_board/api/v1/endpoints/questions.py
"""Question-related endpoints for the Question Board API."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Query, status

from question_board.core.settings import settings
from question_board.models import QuestionType
from question_board.schemas.common import SortOrder, SortType
from question_board.schemas.question import (
    EncounterCreate,
    EncounterResponse,
    QuestionCreate,
    QuestionListQuery,
    QuestionPage,
    QuestionResponse,
    QuestionSummary,
    QuestionUpdate,
)
from question_board.services.question_service import QuestionService

from ..dependencies import ContextDep

router = APIRouter(prefix="/questions", tags=["questions"])


@router.get("/", response_model=QuestionPage)
async def list_questions(
    ctx: ContextDep,
    company_names: Annotated[list[str], Query()] = [],
    locations: Annotated[list[str], Query()] = [],
    roles: Annotated[list[str], Query()] = [],
    question_types: Annotated[list[QuestionType], Query()] = [],
    start_date: datetime | None = Query(None, description="Earliest encounter time"),
    end_date: datetime | None = Query(None, description="Latest encounter time (default: now)"),
    sort_type: SortType = Query(SortType.NEW),
    sort_order: SortOrder = Query(SortOrder.DESC),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    cursor: str | None = Query(None, description="Cursor returned by the previous page"),
) -> QuestionPage:
    """List questions matching the filters, ranked and paginated by cursor.

    Args:
        ctx: Request context
        company_names: Match encounters at any of these companies
        locations: Match encounters in any of these locations
        roles: Match encounters for any of these roles
        question_types: Match questions of any of these types
        start_date: Earliest encounter time to consider
        end_date: Latest encounter time to consider
        sort_type: Rank by votes ("top") or last sighting ("new")
        sort_order: Ranking direction
        limit: Maximum number of questions to return
        cursor: Opaque cursor from the previous page

    Returns:
        The page of questions and the cursor for the next page, if any
    """
    query = QuestionListQuery(
        company_names=company_names,
        locations=locations,
        roles=roles,
        question_types=question_types,
        start_date=start_date,
        end_date=end_date,
        sort_type=sort_type,
        sort_order=sort_order,
        limit=limit,
        cursor=cursor,
    )
    return QuestionService(ctx).list_questions(query)


@router.get("/related", response_model=list[QuestionSummary])
async def search_related_questions(
    ctx: ContextDep,
    content: str = Query(..., description="Free text to match against question content"),
) -> list[QuestionSummary]:
    """Find questions sharing terms with ``content``, most relevant first."""
    questions = QuestionService(ctx).search_related(content)
    return [QuestionSummary.model_validate(question) for question in questions]


@router.get("/{question_id}", response_model=QuestionResponse)
async def get_question(question_id: str, ctx: ContextDep) -> QuestionResponse:
    """Get a specific question with its aggregated encounters.

    Raises:
        NotFoundError: If the question does not exist
    """
    return QuestionService(ctx).get_question(question_id)


@router.post("/", response_model=QuestionResponse, status_code=status.HTTP_201_CREATED)
async def create_question(question_data: QuestionCreate, ctx: ContextDep) -> QuestionResponse:
    """Submit a new question along with where and when it was asked."""
    service = QuestionService(ctx)
    question = service.create_question(
        content=question_data.content,
        question_type=question_data.question_type,
        company_id=question_data.company_id,
        location=question_data.location,
        role=question_data.role,
        seen_at=question_data.seen_at,
    )
    return service.get_question(question.id)


@router.post(
    "/{question_id}/encounters",
    response_model=EncounterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_encounter(
    question_id: str,
    encounter_data: EncounterCreate,
    ctx: ContextDep,
) -> EncounterResponse:
    """Report another sighting of an existing question."""
    encounter = QuestionService(ctx).add_encounter(
        question_id,
        company_id=encounter_data.company_id,
        location=encounter_data.location,
        role=encounter_data.role,
        seen_at=encounter_data.seen_at,
    )
    return EncounterResponse.model_validate(encounter)


@router.patch("/{question_id}", response_model=QuestionResponse)
async def update_question(
    question_id: str,
    question_data: QuestionUpdate,
    ctx: ContextDep,
) -> QuestionResponse:
    """Edit a question (author only)."""
    service = QuestionService(ctx)
    service.update_question(
        question_id,
        content=question_data.content,
        question_type=question_data.question_type,
    )
    return service.get_question(question_id)


@router.delete("/{question_id}", response_model=QuestionSummary)
async def delete_question(question_id: str, ctx: ContextDep) -> QuestionSummary:
    """Delete a question and its encounters and votes (author only)."""
    return QuestionService(ctx).delete_question(question_id)
