# src/question_board/models/question.py
"""SQLAlchemy models for questions and the records hanging off them."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from question_board.db.session import Base
from question_board.db.time import utcnow
from question_board.models.ids import new_id

if TYPE_CHECKING:
    from question_board.models.company import Company
    from question_board.models.user import User
    from question_board.models.vote import QuestionVote


class QuestionType(str, enum.Enum):
    """Category of interview question."""

    CODING = "CODING"
    SYSTEM_DESIGN = "SYSTEM_DESIGN"
    BEHAVIORAL = "BEHAVIORAL"
    THEORY = "THEORY"


class Question(Base):
    """Interview question submitted by a user.

    ``upvotes`` is a denormalized counter that always equals the sum of the
    signed contributions in ``votes`` once a transaction commits.
    """

    __tablename__ = "question"
    __table_args__ = (
        Index("ix_question_upvotes_id", "upvotes", "id"),
        Index("ix_question_last_seen_at_id", "last_seen_at", "id"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    question_type: Mapped[QuestionType] = mapped_column(
        Enum(QuestionType, name="question_type"), nullable=False
    )
    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_seen_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
    user_id: Mapped[str | None] = mapped_column(
        String(32),
        ForeignKey("user_account.id", ondelete="SET NULL"),
        nullable=True,
    )

    user: Mapped[User | None] = relationship("User")
    encounters: Mapped[list[QuestionEncounter]] = relationship(
        back_populates="question",
        cascade="all, delete-orphan",
    )
    votes: Mapped[list[QuestionVote]] = relationship(
        "QuestionVote",
        back_populates="question",
        cascade="all, delete-orphan",
    )
    answers: Mapped[list[QuestionAnswer]] = relationship(
        back_populates="question",
        cascade="all, delete-orphan",
    )
    comments: Mapped[list[QuestionComment]] = relationship(
        back_populates="question",
        cascade="all, delete-orphan",
    )


class QuestionEncounter(Base):
    """A single sighting of a question at a company, location and role."""

    __tablename__ = "question_encounter"
    __table_args__ = (
        Index("ix_question_encounter_question_id", "question_id"),
        Index("ix_question_encounter_seen_at", "seen_at"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    question_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("question.id", ondelete="CASCADE"),
        nullable=False,
    )
    company_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("company.id"),
        nullable=False,
    )
    location: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[str] = mapped_column(Text, nullable=False)
    seen_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    user_id: Mapped[str | None] = mapped_column(
        String(32),
        ForeignKey("user_account.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    question: Mapped[Question] = relationship(back_populates="encounters")
    company: Mapped[Company] = relationship("Company")


class QuestionAnswer(Base):
    """Answer posted under a question."""

    __tablename__ = "question_answer"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    question_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("question.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str | None] = mapped_column(
        String(32),
        ForeignKey("user_account.id", ondelete="SET NULL"),
        nullable=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    question: Mapped[Question] = relationship(back_populates="answers")


class QuestionComment(Base):
    """Comment posted directly under a question."""

    __tablename__ = "question_comment"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    question_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("question.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str | None] = mapped_column(
        String(32),
        ForeignKey("user_account.id", ondelete="SET NULL"),
        nullable=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    question: Mapped[Question] = relationship(back_populates="comments")
