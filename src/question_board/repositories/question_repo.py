"""Data access helpers for working with questions."""
from __future__ import annotations

import functools
import operator
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import ColumnElement, Select, case, cast, func, select, update
from sqlalchemy.dialects.postgresql import REGCONFIG
from sqlalchemy.orm import Session, selectinload

from question_board.models import (
    Company,
    Question,
    QuestionAnswer,
    QuestionComment,
    QuestionEncounter,
    QuestionType,
)

__all__ = ["QuestionRecord", "QuestionRepository", "related_statement"]


@dataclass(frozen=True)
class QuestionRecord:
    """A question loaded with its encounters, votes and child counts."""

    question: Question
    num_answers: int
    num_comments: int


class QuestionRepository:
    """Thin wrapper around database access for question entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def _record_statement(self) -> Select:
        num_answers = (
            select(func.count(QuestionAnswer.id))
            .where(QuestionAnswer.question_id == Question.id)
            .correlate(Question)
            .scalar_subquery()
        )
        num_comments = (
            select(func.count(QuestionComment.id))
            .where(QuestionComment.question_id == Question.id)
            .correlate(Question)
            .scalar_subquery()
        )
        return select(
            Question,
            num_answers.label("num_answers"),
            num_comments.label("num_comments"),
        ).execution_options(populate_existing=True).options(
            selectinload(Question.encounters).selectinload(QuestionEncounter.company),
            selectinload(Question.votes),
            selectinload(Question.user),
        )

    def get_by_id(self, question_id: str) -> Question | None:
        """Return a question by identifier."""
        return self.session.get(Question, question_id)

    def get_record(self, question_id: str) -> QuestionRecord | None:
        """Return a question with everything needed to build its public view."""
        row = self.session.execute(
            self._record_statement().where(Question.id == question_id)
        ).first()
        if row is None:
            return None
        return QuestionRecord(question=row[0], num_answers=row[1], num_comments=row[2])

    def fetch_records(
        self,
        *,
        where: Sequence[ColumnElement[bool]],
        order_by: Sequence[ColumnElement[object]],
        limit: int,
    ) -> list[QuestionRecord]:
        """Run a bounded, ordered listing query built by the pagination layer."""
        stmt = self._record_statement().where(*where).order_by(*order_by).limit(limit)
        return [
            QuestionRecord(question=row[0], num_answers=row[1], num_comments=row[2])
            for row in self.session.execute(stmt).all()
        ]

    def get_company(self, company_id: str) -> Company | None:
        """Return a company by identifier."""
        return self.session.get(Company, company_id)

    def create(
        self,
        *,
        user_id: str,
        content: str,
        question_type: QuestionType,
        company_id: str,
        location: str,
        role: str,
        seen_at: datetime,
    ) -> Question:
        """Insert a question together with its first encounter."""
        question = Question(
            content=content,
            question_type=question_type,
            upvotes=0,
            last_seen_at=seen_at,
            user_id=user_id,
        )
        question.encounters.append(
            QuestionEncounter(
                company_id=company_id,
                location=location,
                role=role,
                seen_at=seen_at,
                user_id=user_id,
            )
        )
        self.session.add(question)
        self.session.flush()
        return question

    def add_encounter(
        self,
        question: Question,
        *,
        user_id: str,
        company_id: str,
        location: str,
        role: str,
        seen_at: datetime,
    ) -> QuestionEncounter:
        """Attach another sighting to an existing question."""
        encounter = QuestionEncounter(
            question_id=question.id,
            company_id=company_id,
            location=location,
            role=role,
            seen_at=seen_at,
            user_id=user_id,
        )
        self.session.add(encounter)
        self.session.flush()
        return encounter

    def delete(self, question: Question) -> None:
        """Delete a question and everything it owns."""
        self.session.delete(question)
        self.session.flush()

    def adjust_upvotes(self, question_id: str, delta: int) -> bool:
        """Apply ``delta`` to the vote counter in a single UPDATE statement.

        Returns:
            False if no question row matched.
        """
        result = self.session.execute(
            update(Question)
            .where(Question.id == question_id)
            .values(upvotes=Question.upvotes + delta)
        )
        return bool(result.rowcount)

    def search_related(self, tsquery: str, *, language: str) -> list[Question]:
        """Return questions matching an OR-joined term query, best match first."""
        dialect_name = self.session.get_bind().dialect.name
        stmt = related_statement(tsquery, language=language, dialect_name=dialect_name)
        return list(self.session.scalars(stmt))


def related_statement(tsquery: str, *, language: str, dialect_name: str) -> Select:
    """Build the related-question search for the given database dialect."""
    if dialect_name == "postgresql":
        config = cast(language, REGCONFIG)
        query = func.to_tsquery(config, tsquery)
        document = func.to_tsvector(config, Question.content)
        return (
            select(Question)
            .where(document.op("@@")(query))
            .order_by(func.ts_rank(document, query).desc(), Question.id)
        )
    # Without a full-text index, rank by how many terms the content contains.
    terms = [
        case(
            (Question.content.icontains(term, autoescape=True), 1),
            else_=0,
        )
        for term in tsquery.split(" | ")
    ]
    hits = functools.reduce(operator.add, terms)
    return select(Question).where(hits > 0).order_by(hits.desc(), Question.id)
