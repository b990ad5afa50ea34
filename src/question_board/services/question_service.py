"""Question listing, lookup, search and authoring."""

from __future__ import annotations

import logging
from datetime import datetime

from question_board.core.settings import settings
from question_board.db.time import ensure_utc
from question_board.models import Question, QuestionEncounter, QuestionType
from question_board.repositories.question_repo import QuestionRecord, QuestionRepository
from question_board.schemas.common import encode_cursor
from question_board.schemas.question import (
    AggregatedEncounters,
    QuestionListQuery,
    QuestionPage,
    QuestionResponse,
    QuestionSummary,
)
from question_board.services.aggregation import (
    EmptyEncounterError,
    EncounterAggregate,
    aggregate_encounters,
    aggregate_votes,
)
from question_board.services.context import RequestContext
from question_board.services.errors import ForbiddenError, NotFoundError
from question_board.services.pagination import paginate_questions
from question_board.services.search import build_tsquery

logger = logging.getLogger(__name__)


def to_question_response(record: QuestionRecord) -> QuestionResponse:
    """Convert a loaded question record into its public view."""
    question = record.question
    try:
        stats = aggregate_encounters(question.encounters)
    except EmptyEncounterError:
        # Creation always records an encounter, so this only happens if rows were removed by hand.
        logger.warning("Question %s has no encounters; using stored last_seen_at", question.id)
        stats = EncounterAggregate(latest_seen_at=question.last_seen_at, received_count=0)

    return QuestionResponse(
        id=question.id,
        content=question.content,
        type=question.question_type,
        num_votes=aggregate_votes(question.votes),
        num_answers=record.num_answers,
        num_comments=record.num_comments,
        received_count=stats.received_count,
        seen_at=stats.latest_seen_at,
        updated_at=question.updated_at,
        user=(question.user.name or "") if question.user else "",
        aggregated_encounters=AggregatedEncounters(
            company_counts=stats.company_counts,
            location_counts=stats.location_counts,
            role_counts=stats.role_counts,
            latest_seen_at=stats.latest_seen_at,
        ),
    )


class QuestionService:
    """Read and write questions on behalf of the request's caller."""

    def __init__(self, ctx: RequestContext) -> None:
        self.ctx = ctx
        self.questions = QuestionRepository(ctx.session)

    def list_questions(self, query: QuestionListQuery) -> QuestionPage:
        """Return one filtered, ranked page of questions."""
        self.ctx.require_user()
        page = paginate_questions(self.questions, query)
        return QuestionPage(
            data=[to_question_response(record) for record in page.records],
            next_cursor=encode_cursor(page.next_cursor) if page.next_cursor else None,
        )

    def get_question(self, question_id: str) -> QuestionResponse:
        """Return the public view of one question.

        Raises:
            NotFoundError: If the question does not exist.
        """
        self.ctx.require_user()
        record = self.questions.get_record(question_id)
        if record is None:
            raise NotFoundError("Question not found")
        return to_question_response(record)

    def search_related(self, content: str) -> list[Question]:
        """Return questions whose content shares terms with ``content``, best first."""
        self.ctx.require_user()
        tsquery = build_tsquery(content)
        if not tsquery:
            return []
        logger.debug("Searching related questions for %r", tsquery)
        return self.questions.search_related(tsquery, language=settings.search_language)

    def create_question(
        self,
        *,
        content: str,
        question_type: QuestionType,
        company_id: str,
        location: str,
        role: str,
        seen_at: datetime,
    ) -> Question:
        """Create a question together with the encounter that reported it.

        Raises:
            NotFoundError: If the company does not exist.
        """
        user_id = self.ctx.require_user()
        with self.ctx.transaction():
            if self.questions.get_company(company_id) is None:
                raise NotFoundError("Company not found")
            question = self.questions.create(
                user_id=user_id,
                content=content,
                question_type=question_type,
                company_id=company_id,
                location=location,
                role=role,
                seen_at=ensure_utc(seen_at),
            )
        logger.info("User %s created question %s", user_id, question.id)
        return question

    def add_encounter(
        self,
        question_id: str,
        *,
        company_id: str,
        location: str,
        role: str,
        seen_at: datetime,
    ) -> QuestionEncounter:
        """Record another sighting of an existing question.

        Raises:
            NotFoundError: If the question or company does not exist.
        """
        user_id = self.ctx.require_user()
        with self.ctx.transaction():
            question = self.questions.get_by_id(question_id)
            if question is None:
                raise NotFoundError("Question not found")
            if self.questions.get_company(company_id) is None:
                raise NotFoundError("Company not found")
            encounter = self.questions.add_encounter(
                question,
                user_id=user_id,
                company_id=company_id,
                location=location,
                role=role,
                seen_at=ensure_utc(seen_at),
            )
            if ensure_utc(encounter.seen_at) > ensure_utc(question.last_seen_at):
                question.last_seen_at = encounter.seen_at
        return encounter

    def update_question(
        self,
        question_id: str,
        *,
        content: str | None = None,
        question_type: QuestionType | None = None,
    ) -> Question:
        """Edit the caller's own question; omitted fields are left unchanged.

        Raises:
            NotFoundError: If the question does not exist.
            ForbiddenError: If the caller does not own the question.
        """
        user_id = self.ctx.require_user()
        with self.ctx.transaction():
            question = self._get_owned_question(question_id, user_id)
            if content is not None:
                question.content = content
            if question_type is not None:
                question.question_type = question_type
        return question

    def delete_question(self, question_id: str) -> QuestionSummary:
        """Delete the caller's own question along with its encounters and votes.

        Raises:
            NotFoundError: If the question does not exist.
            ForbiddenError: If the caller does not own the question.
        """
        user_id = self.ctx.require_user()
        with self.ctx.transaction():
            question = self._get_owned_question(question_id, user_id)
            deleted = QuestionSummary.model_validate(question)
            self.questions.delete(question)
        logger.info("User %s deleted question %s", user_id, question_id)
        return deleted

    def _get_owned_question(self, question_id: str, user_id: str) -> Question:
        question = self.questions.get_by_id(question_id)
        if question is None:
            raise NotFoundError("Question not found")
        if question.user_id != user_id:
            logger.warning("User %s attempted to modify question %s", user_id, question_id)
            raise ForbiddenError("You can only change your own questions")
        return question
