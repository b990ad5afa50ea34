# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime
from itertools import count
from typing import Any

import pytest

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from question_board.core.security import create_access_token
from question_board.db.session import Base, build_engine
from question_board.db.session import get_db as app_get_session
from question_board.main import app as fastapi_app
from question_board.models import (
    Company,
    Question,
    QuestionEncounter,
    QuestionType,
    User,
)
from question_board.services.context import RequestContext

TEST_DB_URL = "sqlite://"

_USER_COUNTER = count(1)

BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(TEST_DB_URL)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists users."""

    def _make_user(name: str | None = None) -> User:
        user = User(name=name or f"User {next(_USER_COUNTER)}")
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return the primary test user."""
    return make_user("Test User")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second user."""
    return make_user("Other User")


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return {"Authorization": f"Bearer {create_access_token(test_user.id)}"}


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return {"Authorization": f"Bearer {create_access_token(other_user.id)}"}


@pytest.fixture()
def ctx(db_session: Session, test_user: User) -> RequestContext:
    """Request context acting as the primary test user."""
    return RequestContext(session=db_session, user_id=test_user.id)


@pytest.fixture()
def other_ctx(db_session: Session, other_user: User) -> RequestContext:
    """Request context acting as the secondary test user."""
    return RequestContext(session=db_session, user_id=other_user.id)


@pytest.fixture()
def anonymous_ctx(db_session: Session) -> RequestContext:
    """Request context without a caller identity."""
    return RequestContext(session=db_session)


@pytest.fixture()
def make_company(db_session: Session) -> Callable[[str], Company]:
    """Return a factory that persists companies, reusing existing names."""

    def _make_company(name: str) -> Company:
        company = db_session.query(Company).filter(Company.name == name).first()
        if company is None:
            company = Company(name=name)
            db_session.add(company)
            db_session.commit()
        return company

    return _make_company


@pytest.fixture()
def company(make_company: Callable[[str], Company]) -> Company:
    """Create a default test company."""
    return make_company("Acme")


@pytest.fixture()
def make_question(
    db_session: Session,
    test_user: User,
    make_company: Callable[[str], Company],
) -> Callable[..., Question]:
    """Return a factory that persists a question and its encounters.

    Each encounter is a dict with optional ``company``, ``location``, ``role``
    and ``seen_at`` keys.
    """

    def _make_question(
        content: str = "Reverse a linked list",
        *,
        question_type: QuestionType = QuestionType.CODING,
        encounters: list[dict[str, Any]] | None = None,
        owner: User | None = None,
    ) -> Question:
        encounter_specs = encounters if encounters is not None else [{}]
        rows = [
            QuestionEncounter(
                company_id=make_company(spec.get("company", "Acme")).id,
                location=spec.get("location", "Singapore"),
                role=spec.get("role", "Software Engineer"),
                seen_at=spec.get("seen_at", BASE_TIME),
                user_id=(owner or test_user).id,
            )
            for spec in encounter_specs
        ]
        question = Question(
            content=content,
            question_type=question_type,
            upvotes=0,
            last_seen_at=max((row.seen_at for row in rows), default=BASE_TIME),
            user_id=(owner or test_user).id,
            encounters=rows,
        )
        db_session.add(question)
        db_session.commit()
        return question

    return _make_question
