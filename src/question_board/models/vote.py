# src/question_board/models/vote.py
"""Models capturing votes on questions."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from question_board.db.session import Base
from question_board.db.time import utcnow
from question_board.models.ids import new_id

if TYPE_CHECKING:
    from question_board.models.question import Question


class VoteValue(str, enum.Enum):
    """Direction of a vote."""

    UPVOTE = "UPVOTE"
    DOWNVOTE = "DOWNVOTE"

    @property
    def contribution(self) -> int:
        """Signed amount this vote adds to the question counter."""
        return 1 if self is VoteValue.UPVOTE else -1


class QuestionVote(Base):
    """Ledger row recording one user's vote on one question."""

    __tablename__ = "question_vote"
    __table_args__ = (
        # At most one vote per user per question.
        UniqueConstraint("question_id", "user_id", name="uq_question_vote_question_user"),
        Index("ix_question_vote_question_id", "question_id"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    question_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("question.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
    )
    vote: Mapped[VoteValue] = mapped_column(Enum(VoteValue, name="vote_value"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    question: Mapped[Question] = relationship("Question", back_populates="votes")
