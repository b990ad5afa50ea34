# mypy: ignore-errors
# tests/services/test_pagination.py
"""Tests for filtered, ranked keyset pagination of questions."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from question_board.db.time import ensure_utc
from question_board.models import QuestionType, VoteValue
from question_board.schemas.common import NewCursor, SortOrder, SortType, TopCursor, encode_cursor
from question_board.schemas.question import QuestionListQuery
from question_board.services.context import RequestContext
from question_board.services.errors import InvalidInputError, UnauthenticatedError
from question_board.services.question_service import QuestionService
from question_board.services.vote_service import VoteService

BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


def _collect(service, **params):
    """Walk every page of a listing and return the ids in order."""
    ids = []
    cursor = None
    for _ in range(100):
        page = service.list_questions(QuestionListQuery(cursor=cursor, **params))
        ids.extend(item.id for item in page.data)
        if page.next_cursor is None:
            return ids
        cursor = page.next_cursor
    pytest.fail("pagination did not terminate")


@pytest.fixture()
def five_questions(make_question):
    """Five questions seen on consecutive days, keyed by their seen_at."""
    questions = {}
    for day in range(5):
        seen_at = BASE_TIME + timedelta(days=day)
        questions[seen_at] = make_question(
            f"Question {day}",
            encounters=[{"seen_at": seen_at}],
        )
    return {seen_at: question.id for seen_at, question in questions.items()}


def test_new_desc_walks_every_question_once(ctx, five_questions) -> None:
    """Paging by two returns every question exactly once, newest first."""
    ids = _collect(QuestionService(ctx), limit=2)

    expected = [five_questions[key] for key in sorted(five_questions, reverse=True)]
    assert ids == expected


def test_new_asc_orders_oldest_first(ctx, five_questions) -> None:
    """Ascending order starts from the oldest sighting."""
    ids = _collect(QuestionService(ctx), limit=3, sort_order=SortOrder.ASC)

    expected = [five_questions[key] for key in sorted(five_questions)]
    assert ids == expected


def test_page_sizes_and_cursor_presence(ctx, five_questions) -> None:
    """A cursor is issued only while more rows remain."""
    service = QuestionService(ctx)

    first = service.list_questions(QuestionListQuery(limit=3))
    assert len(first.data) == 3
    assert first.next_cursor is not None

    second = service.list_questions(QuestionListQuery(limit=3, cursor=first.next_cursor))
    assert len(second.data) == 2
    assert second.next_cursor is None


def test_exact_fit_has_no_next_cursor(ctx, five_questions) -> None:
    """A page that holds every remaining row does not issue a cursor."""
    page = QuestionService(ctx).list_questions(QuestionListQuery(limit=5))

    assert len(page.data) == 5
    assert page.next_cursor is None


def test_ties_on_sort_key_break_by_id(ctx, make_question) -> None:
    """Questions sharing a sort key still page without gaps or repeats."""
    created = [
        make_question(f"Tied {index}", encounters=[{"seen_at": BASE_TIME}]).id
        for index in range(5)
    ]

    ids = _collect(QuestionService(ctx), limit=2)

    assert ids == sorted(created, reverse=True)


def test_top_desc_orders_by_votes_then_id(ctx, make_user, make_question, db_session) -> None:
    """The top ranking is non-increasing in score with id as the tie-break."""
    questions = [make_question(f"Question {index}") for index in range(4)]
    scores = {questions[0].id: 2, questions[1].id: -1, questions[2].id: 0, questions[3].id: 2}
    for question_id, score in scores.items():
        value = VoteValue.UPVOTE if score > 0 else VoteValue.DOWNVOTE
        for _ in range(abs(score)):
            voter = make_user()
            VoteService(RequestContext(session=db_session, user_id=voter.id)).create_vote(
                question_id, value
            )

    service = QuestionService(ctx)
    ids = _collect(service, limit=1, sort_type=SortType.TOP)

    expected = sorted(scores, key=lambda question_id: (scores[question_id], question_id), reverse=True)
    assert ids == expected
    page = service.list_questions(QuestionListQuery(sort_type=SortType.TOP))
    assert [item.num_votes for item in page.data] == sorted(scores.values(), reverse=True)


def test_top_asc_orders_lowest_score_first(ctx, make_user, make_question, db_session) -> None:
    """Ascending top ranking starts with the most downvoted question."""
    liked = make_question("Liked")
    disliked = make_question("Disliked")
    voter = make_user()
    voter_ctx = RequestContext(session=db_session, user_id=voter.id)
    VoteService(voter_ctx).create_vote(liked.id, VoteValue.UPVOTE)
    VoteService(voter_ctx).create_vote(disliked.id, VoteValue.DOWNVOTE)

    ids = _collect(
        QuestionService(ctx), limit=1, sort_type=SortType.TOP, sort_order=SortOrder.ASC
    )

    assert ids == [disliked.id, liked.id]


def test_cursor_survives_insertions(ctx, make_question, five_questions) -> None:
    """Questions added between page fetches do not duplicate earlier rows."""
    service = QuestionService(ctx)
    first = service.list_questions(QuestionListQuery(limit=2))

    make_question("Late arrival", encounters=[{"seen_at": BASE_TIME + timedelta(days=10)}])
    rest = _collect_from(service, first.next_cursor, limit=2)

    seen = [item.id for item in first.data] + rest
    assert len(seen) == len(set(seen)) == 5


def _collect_from(service, cursor, **params):
    ids = []
    while cursor is not None:
        page = service.list_questions(QuestionListQuery(cursor=cursor, **params))
        ids.extend(item.id for item in page.data)
        cursor = page.next_cursor
    return ids


def test_filter_by_company(ctx, make_question) -> None:
    """Only questions seen at one of the named companies are listed."""
    acme = make_question("At Acme", encounters=[{"company": "Acme"}])
    globex = make_question("At Globex", encounters=[{"company": "Globex"}])
    make_question("At Initech", encounters=[{"company": "Initech"}])

    ids = _collect(QuestionService(ctx), company_names=["Acme", "Globex"])

    assert set(ids) == {acme.id, globex.id}


def test_filter_by_location_and_role(ctx, make_question) -> None:
    """Location and role filters narrow the listing."""
    match = make_question("Match", encounters=[{"location": "London", "role": "SRE"}])
    make_question("Wrong role", encounters=[{"location": "London", "role": "PM"}])
    make_question("Wrong place", encounters=[{"location": "Tokyo", "role": "SRE"}])

    ids = _collect(QuestionService(ctx), locations=["London"], roles=["SRE"])

    assert ids == [match.id]


def test_encounter_filters_apply_to_the_same_encounter(ctx, make_question) -> None:
    """Company and location must hold together on a single sighting."""
    make_question(
        "Split across sightings",
        encounters=[
            {"company": "Acme", "location": "Singapore"},
            {"company": "Globex", "location": "London"},
        ],
    )
    together = make_question(
        "Single sighting",
        encounters=[{"company": "Acme", "location": "London"}],
    )

    ids = _collect(QuestionService(ctx), company_names=["Acme"], locations=["London"])

    assert ids == [together.id]


def test_filter_by_question_type(ctx, make_question) -> None:
    """Question type filters match the question, not its encounters."""
    design = make_question("Design Twitter", question_type=QuestionType.SYSTEM_DESIGN)
    make_question("Tell me about a conflict", question_type=QuestionType.BEHAVIORAL)

    ids = _collect(QuestionService(ctx), question_types=[QuestionType.SYSTEM_DESIGN])

    assert ids == [design.id]


def test_filter_by_date_window(ctx, five_questions) -> None:
    """Only questions with a sighting inside the window are listed."""
    start = BASE_TIME + timedelta(days=1)
    end = BASE_TIME + timedelta(days=3)

    ids = _collect(QuestionService(ctx), start_date=start, end_date=end)

    expected = [
        five_questions[key]
        for key in sorted(five_questions, reverse=True)
        if start <= key <= end
    ]
    assert ids == expected


def test_end_date_defaults_to_now(ctx, make_question) -> None:
    """Sightings dated in the future are hidden until they happen."""
    past = make_question("Past", encounters=[{"seen_at": BASE_TIME}])
    make_question("Future", encounters=[{"seen_at": datetime.now(UTC) + timedelta(days=30)}])

    assert _collect(QuestionService(ctx)) == [past.id]


def test_start_after_end_is_rejected(ctx) -> None:
    """An inverted date window is a validation error."""
    query = QuestionListQuery(
        start_date=BASE_TIME + timedelta(days=2),
        end_date=BASE_TIME,
    )

    with pytest.raises(InvalidInputError):
        QuestionService(ctx).list_questions(query)


def test_malformed_cursor_is_rejected(ctx, five_questions) -> None:
    """Garbage cursors are reported as invalid input."""
    with pytest.raises(InvalidInputError):
        QuestionService(ctx).list_questions(QuestionListQuery(cursor="not-a-cursor!"))


def test_cursor_kind_must_match_sort_type(ctx, five_questions) -> None:
    """A cursor issued for one ranking cannot resume another."""
    token = encode_cursor(TopCursor(id="0" * 32, upvotes=0))

    with pytest.raises(InvalidInputError):
        QuestionService(ctx).list_questions(
            QuestionListQuery(cursor=token, sort_type=SortType.NEW)
        )


def test_hand_built_cursor_resumes_at_named_row(ctx, five_questions) -> None:
    """The cursor row itself is the first row of the resumed page."""
    newest_first = sorted(five_questions, reverse=True)
    resume_at = newest_first[2]
    token = encode_cursor(NewCursor(id=five_questions[resume_at], last_seen=resume_at))

    page = QuestionService(ctx).list_questions(QuestionListQuery(cursor=token, limit=10))

    assert [item.id for item in page.data] == [five_questions[key] for key in newest_first[2:]]


def test_listing_requires_user(anonymous_ctx) -> None:
    """Anonymous callers cannot list questions."""
    with pytest.raises(UnauthenticatedError):
        QuestionService(anonymous_ctx).list_questions(QuestionListQuery())


def test_offset_timestamps_order_by_instant(ctx, company) -> None:
    """Sightings reported with different UTC offsets sort by their real instant."""
    service = QuestionService(ctx)
    plus_five = timezone(timedelta(hours=5))
    early = _create_seen_at(service, company, datetime(2026, 1, 1, 12, 0, tzinfo=plus_five))
    late = _create_seen_at(service, company, datetime(2026, 1, 1, 10, 0, tzinfo=UTC))

    page = service.list_questions(QuestionListQuery())

    assert [item.id for item in page.data] == [late.id, early.id]
    assert [ensure_utc(item.seen_at) for item in page.data] == [
        datetime(2026, 1, 1, 10, 0, tzinfo=UTC),
        datetime(2026, 1, 1, 7, 0, tzinfo=UTC),
    ]


def test_offset_timestamps_respect_date_window(ctx, company) -> None:
    """Date windows compare instants, whatever offset either side was given in."""
    service = QuestionService(ctx)
    plus_five = timezone(timedelta(hours=5))
    _create_seen_at(service, company, datetime(2026, 1, 1, 12, 0, tzinfo=plus_five))
    inside = _create_seen_at(service, company, datetime(2026, 1, 1, 10, 0, tzinfo=UTC))

    ids = _collect(
        service,
        start_date=datetime(2026, 1, 1, 13, 0, tzinfo=plus_five),
        end_date=datetime(2026, 1, 1, 11, 0, tzinfo=UTC),
    )

    assert ids == [inside.id]


def _create_seen_at(service, company, seen_at):
    return service.create_question(
        content=f"Seen at {seen_at.isoformat()}",
        question_type=QuestionType.CODING,
        company_id=company.id,
        location="Singapore",
        role="SWE",
        seen_at=seen_at,
    )
