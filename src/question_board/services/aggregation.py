"""Fold a question's encounter and vote rows into display statistics.

Everything here is a pure function over a snapshot of rows: no session
access and no mutation of the inputs.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from question_board.db.time import ensure_utc
from question_board.models import QuestionEncounter, QuestionVote


class EmptyEncounterError(ValueError):
    """Raised when a question has no encounters to aggregate."""


@dataclass(frozen=True)
class EncounterAggregate:
    """Per-question encounter statistics."""

    latest_seen_at: datetime
    received_count: int
    company_counts: dict[str, int] = field(default_factory=dict)
    location_counts: dict[str, int] = field(default_factory=dict)
    role_counts: dict[str, int] = field(default_factory=dict)


def aggregate_votes(votes: Iterable[QuestionVote]) -> int:
    """Return the net score of a vote ledger (+1 per upvote, -1 per downvote)."""
    return sum(row.vote.contribution for row in votes)


def aggregate_encounters(encounters: Iterable[QuestionEncounter]) -> EncounterAggregate:
    """Count encounters by company, location and role in a single pass.

    Raises:
        EmptyEncounterError: If ``encounters`` is empty, since there is no
            latest sighting to report.
    """
    company_counts: Counter[str] = Counter()
    location_counts: Counter[str] = Counter()
    role_counts: Counter[str] = Counter()
    latest_seen_at: datetime | None = None
    received_count = 0

    for encounter in encounters:
        received_count += 1
        company_counts[encounter.company.name] += 1
        location_counts[encounter.location] += 1
        role_counts[encounter.role] += 1
        if latest_seen_at is None or ensure_utc(encounter.seen_at) > ensure_utc(latest_seen_at):
            latest_seen_at = encounter.seen_at

    if latest_seen_at is None:
        raise EmptyEncounterError("Question has no encounters")

    return EncounterAggregate(
        latest_seen_at=latest_seen_at,
        received_count=received_count,
        company_counts=dict(company_counts),
        location_counts=dict(location_counts),
        role_counts=dict(role_counts),
    )
