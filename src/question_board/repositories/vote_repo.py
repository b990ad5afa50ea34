"""Data access helpers for the question vote ledger."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from question_board.models import QuestionVote, VoteValue

__all__ = ["VoteRepository"]


class VoteRepository:
    """Thin wrapper around database access for vote ledger rows."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, vote_id: str, *, for_update: bool = False) -> QuestionVote | None:
        """Return a vote row, optionally locking it for the rest of the transaction."""
        stmt = select(QuestionVote).where(QuestionVote.id == vote_id)
        if for_update:
            stmt = stmt.with_for_update()
        return self.session.scalars(stmt).first()

    def get_for_user(self, question_id: str, user_id: str) -> QuestionVote | None:
        """Return the vote a user cast on a question, if any."""
        return self.session.scalars(
            select(QuestionVote).where(
                QuestionVote.question_id == question_id,
                QuestionVote.user_id == user_id,
            )
        ).first()

    def add(self, *, question_id: str, user_id: str, vote: VoteValue) -> QuestionVote:
        """Insert a ledger row and flush so uniqueness is checked immediately."""
        row = QuestionVote(question_id=question_id, user_id=user_id, vote=vote)
        self.session.add(row)
        self.session.flush()
        return row

    def delete(self, row: QuestionVote) -> None:
        """Remove a ledger row."""
        self.session.delete(row)
        self.session.flush()
