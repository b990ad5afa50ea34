# src/question_board/models/user.py
"""SQLAlchemy model for board users."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from question_board.db.session import Base
from question_board.db.time import utcnow
from question_board.models.ids import new_id


class User(Base):
    """Identity referenced by questions, encounters and votes.

    Accounts are issued by the external session provider; this table only
    mirrors the identifier and display name.
    """

    __tablename__ = "user_account"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    name: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
