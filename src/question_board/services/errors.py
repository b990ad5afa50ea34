"""Typed failures raised by the service layer.

Every error carries a ``kind`` from the board's error taxonomy and the HTTP
status the API layer renders it with.
"""

from __future__ import annotations

from fastapi import status


class QuestionBoardError(RuntimeError):
    """Base exception for failures surfaced to callers."""

    kind = "error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(QuestionBoardError):
    """Raised for malformed or out-of-range input, before storage is touched."""

    kind = "validation"
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthenticatedError(QuestionBoardError):
    """Raised when an operation is attempted without a caller identity."""

    kind = "unauthenticated"
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(QuestionBoardError):
    """Raised when the caller does not own the record being changed."""

    kind = "forbidden"
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(QuestionBoardError):
    """Raised when a referenced record does not exist."""

    kind = "not-found"
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(QuestionBoardError):
    """Raised on uniqueness violations such as a duplicate vote."""

    kind = "conflict"
    status_code = status.HTTP_409_CONFLICT
