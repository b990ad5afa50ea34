"""Shared API dependencies for authentication and request context."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from question_board.core.security import decode_access_token
from question_board.db.session import get_db
from question_board.models import User
from question_board.services.context import RequestContext

# Missing credentials are not rejected here; services raise UnauthenticatedError
# before touching storage.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> str | None:
    """Resolve the caller's user id from a bearer JWT.

    Args:
        credentials: HTTP Bearer token credentials, if any were sent
        db: Database session

    Returns:
        The user id, or None for anonymous requests

    Raises:
        HTTPException: If a token was sent but is invalid or names an unknown user
    """
    if credentials is None:
        return None
    try:
        subject = decode_access_token(credentials.credentials)
    except JWTError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err
    if subject is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )
    if db.get(User, subject) is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return subject


def get_request_context(
    db: SessionDep,
    user_id: Annotated[str | None, Depends(get_current_user_id)],
) -> RequestContext:
    """Bundle the caller identity and session for the service layer."""
    return RequestContext(session=db, user_id=user_id)


# Type alias for request context dependency
ContextDep = Annotated[RequestContext, Depends(get_request_context)]
