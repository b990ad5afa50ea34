"""Identifier generation for primary keys."""

import uuid


def new_id() -> str:
    """Return a new opaque identifier."""
    return uuid.uuid4().hex
