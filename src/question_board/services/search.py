"""Helpers for turning free text into a full-text OR query."""

from __future__ import annotations

import re

# Characters with meaning in PostgreSQL tsquery syntax.
_TSQUERY_SPECIAL = re.compile(r"[()|&:*!'\"\\<>]")


def sanitize_search_terms(text: str) -> list[str]:
    """Strip query-syntax characters and split ``text`` into search terms."""
    return _TSQUERY_SPECIAL.sub(" ", text).split()


def build_tsquery(text: str) -> str:
    """Return ``text`` as an OR-joined term query, or an empty string."""
    return " | ".join(sanitize_search_terms(text))
