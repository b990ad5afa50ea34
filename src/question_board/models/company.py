# src/question_board/models/company.py
"""SQLAlchemy model for companies referenced by encounters."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from question_board.db.session import Base
from question_board.db.time import utcnow
from question_board.models.ids import new_id


class Company(Base):
    """Company at which a question was asked."""

    __tablename__ = "company"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
