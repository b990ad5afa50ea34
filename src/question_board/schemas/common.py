"""Shared Pydantic schemas for sorting and cursor pagination."""
from __future__ import annotations

import base64
import binascii
import enum
from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, Field, TypeAdapter, ValidationError


class SortType(str, enum.Enum):
    """Ranking used for question listings."""

    TOP = "top"
    NEW = "new"


class SortOrder(str, enum.Enum):
    """Direction of the ranking."""

    ASC = "asc"
    DESC = "desc"


class NewCursor(BaseModel):
    """Resume point for listings sorted by last-seen time."""

    kind: Literal["new"] = "new"
    id: str
    last_seen: datetime


class TopCursor(BaseModel):
    """Resume point for listings sorted by vote count."""

    kind: Literal["top"] = "top"
    id: str
    upvotes: int


PageCursor = Annotated[NewCursor | TopCursor, Field(discriminator="kind")]

_cursor_adapter: TypeAdapter[NewCursor | TopCursor] = TypeAdapter(PageCursor)


def encode_cursor(cursor: NewCursor | TopCursor) -> str:
    """Serialize a cursor into an opaque URL-safe token."""
    raw = cursor.model_dump_json().encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode().rstrip("=")


def decode_cursor(token: str) -> NewCursor | TopCursor:
    """Parse a token produced by :func:`encode_cursor`.

    Raises:
        ValueError: If the token is not a well-formed cursor.
    """
    padding = "=" * (-len(token) % 4)
    try:
        raw = base64.urlsafe_b64decode(token + padding)
        return _cursor_adapter.validate_json(raw)
    except (binascii.Error, ValidationError) as err:
        raise ValueError("Malformed pagination cursor") from err
