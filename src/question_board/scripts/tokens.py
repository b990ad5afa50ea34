# src/question_board/scripts/tokens.py
"""Mint a bearer token for local development.

Sessions are normally issued by the external identity provider. This script
registers a user row if needed and prints a token the API will accept for it.

Usage:
    python -m question_board.scripts.tokens <user_id> [display name]
"""

import argparse

from sqlalchemy.orm import Session

from question_board.core.security import create_access_token
from question_board.db.session import SessionLocal
from question_board.models import User


def ensure_user(db: Session, user_id: str, name: str | None) -> User:
    """Return the user with ``user_id``, creating it if missing."""
    user = db.get(User, user_id)
    if user is None:
        user = User(id=user_id, name=name)
        db.add(user)
        db.commit()
    return user


def main() -> None:
    parser = argparse.ArgumentParser(description="Issue a development bearer token")
    parser.add_argument("user_id")
    parser.add_argument("name", nargs="?", default=None)
    args = parser.parse_args()

    db = SessionLocal()
    try:
        user = ensure_user(db, args.user_id, args.name)
        print(create_access_token(user.id))
    finally:
        db.close()


if __name__ == "__main__":
    main()
