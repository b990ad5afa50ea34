# src/question_board/db/__init__.py
"""Database engine, sessions and time helpers."""

from .session import Base, SessionLocal, build_engine, get_db

__all__ = ["Base", "SessionLocal", "build_engine", "get_db"]
