"""Keyset pagination over filtered, ranked question listings.

The listing order is always ``(sort key, id)`` in the requested direction, so
the order is total and a cursor naming the first unreturned row identifies
exactly where the next page starts. A page fetches ``limit + 1`` rows; the
extra row is never returned, it only seeds the next cursor.

Cursors stay valid when other questions are inserted or deleted. If the sort
key of the cursored row itself changes between pages (a vote arrives on it),
one boundary row may be skipped or repeated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import ColumnElement, and_, or_

from question_board.db.time import ensure_utc, utcnow
from question_board.models import Company, Question, QuestionEncounter
from question_board.repositories.question_repo import QuestionRecord, QuestionRepository
from question_board.schemas.common import (
    NewCursor,
    SortOrder,
    SortType,
    TopCursor,
    decode_cursor,
)
from question_board.schemas.question import QuestionListQuery
from question_board.services.errors import InvalidInputError

logger = logging.getLogger(__name__)

Cursor = NewCursor | TopCursor


@dataclass(frozen=True)
class PageResult:
    """Rows for one page plus the cursor for the next one, if any."""

    records: list[QuestionRecord]
    next_cursor: Cursor | None


def _sort_column(sort_type: SortType) -> ColumnElement[object]:
    if sort_type is SortType.TOP:
        return Question.upvotes
    return Question.last_seen_at


def build_filters(query: QuestionListQuery, *, now: datetime) -> list[ColumnElement[bool]]:
    """Translate listing filters into WHERE clauses.

    All encounter filters apply to the same encounter: a question matches when
    at least one of its sightings satisfies every given field.
    """
    end_date = query.end_date or now
    if query.start_date is not None and query.start_date > end_date:
        raise InvalidInputError("start_date must not be after end_date")

    encounter_conditions: list[ColumnElement[bool]] = [QuestionEncounter.seen_at <= end_date]
    if query.start_date is not None:
        encounter_conditions.append(QuestionEncounter.seen_at >= query.start_date)
    if query.company_names:
        encounter_conditions.append(
            QuestionEncounter.company.has(Company.name.in_(query.company_names))
        )
    if query.locations:
        encounter_conditions.append(QuestionEncounter.location.in_(query.locations))
    if query.roles:
        encounter_conditions.append(QuestionEncounter.role.in_(query.roles))

    filters: list[ColumnElement[bool]] = [Question.encounters.any(and_(*encounter_conditions))]
    if query.question_types:
        filters.append(Question.question_type.in_(query.question_types))
    return filters


def build_order_by(sort_type: SortType, sort_order: SortOrder) -> list[ColumnElement[object]]:
    """Return the ORDER BY clauses for a ranking, with the id tie-break last."""
    columns = [_sort_column(sort_type), Question.id]
    if sort_order is SortOrder.DESC:
        return [column.desc() for column in columns]
    return [column.asc() for column in columns]


def resolve_cursor(query: QuestionListQuery) -> Cursor | None:
    """Decode the request cursor and check it belongs to the requested ranking."""
    if query.cursor is None:
        return None
    try:
        cursor = decode_cursor(query.cursor)
    except ValueError as err:
        raise InvalidInputError(str(err)) from err
    if SortType(cursor.kind) is not query.sort_type:
        raise InvalidInputError(
            f"Cursor was issued for sort type '{cursor.kind}', not '{query.sort_type.value}'"
        )
    return cursor


def keyset_condition(cursor: Cursor, sort_order: SortOrder) -> ColumnElement[bool]:
    """Return the predicate selecting rows at or after ``cursor`` in listing order."""
    if isinstance(cursor, TopCursor):
        column, value = _sort_column(SortType.TOP), cursor.upvotes
    else:
        column, value = _sort_column(SortType.NEW), ensure_utc(cursor.last_seen)

    if sort_order is SortOrder.DESC:
        return or_(column < value, and_(column == value, Question.id <= cursor.id))
    return or_(column > value, and_(column == value, Question.id >= cursor.id))


def cursor_for(question: Question, sort_type: SortType) -> Cursor:
    """Build the cursor that resumes a listing at ``question``."""
    if sort_type is SortType.TOP:
        return TopCursor(id=question.id, upvotes=question.upvotes)
    return NewCursor(id=question.id, last_seen=question.last_seen_at)


def paginate_questions(
    repo: QuestionRepository,
    query: QuestionListQuery,
    *,
    now: datetime | None = None,
) -> PageResult:
    """Fetch one page of questions matching ``query``."""
    cursor = resolve_cursor(query)
    where = build_filters(query, now=now or utcnow())
    if cursor is not None:
        where.append(keyset_condition(cursor, query.sort_order))

    records = repo.fetch_records(
        where=where,
        order_by=build_order_by(query.sort_type, query.sort_order),
        limit=query.limit + 1,
    )

    next_cursor: Cursor | None = None
    if len(records) > query.limit:
        next_item = records.pop()
        next_cursor = cursor_for(next_item.question, query.sort_type)

    logger.debug(
        "Listed %d questions (sort=%s %s, more=%s)",
        len(records),
        query.sort_type.value,
        query.sort_order.value,
        next_cursor is not None,
    )
    return PageResult(records=records, next_cursor=next_cursor)
