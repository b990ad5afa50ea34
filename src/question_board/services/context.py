"""Request-scoped context passed explicitly into every service call."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from sqlalchemy.orm import Session

from question_board.services.errors import UnauthenticatedError


@dataclass
class RequestContext:
    """Caller identity plus the database session for one request."""

    session: Session
    user_id: str | None = None

    def require_user(self) -> str:
        """Return the caller id or raise if the request is anonymous."""
        if self.user_id is None:
            raise UnauthenticatedError("Authentication required")
        return self.user_id

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """Run a unit of work that commits on success and rolls back on any failure."""
        try:
            yield self.session
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
