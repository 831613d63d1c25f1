from collections.abc import Callable, Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.role_sync import sync_default_roles
from app.core.security import generate_activation_token, hash_activation_token
from app.db.base import Base
from app.db import models  # noqa: F401
from app.db.models.role import Role
from app.db.models.user import User

PROVIDER = "greenlight"


@pytest.fixture()
def session_factory() -> Generator[sessionmaker, None, None]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    Base.metadata.create_all(bind=engine)
    try:
        yield TestingSessionLocal
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    sync_default_roles(session, [PROVIDER])
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., tuple[User, str]]:
    """Create a user with a freshly issued activation token; returns (user, raw_token)."""

    def _make_user(
        *,
        email: str = "test@example.com",
        provider: str = PROVIDER,
        email_verified: bool = False,
        role: Role | None = None,
    ) -> tuple[User, str]:
        token = generate_activation_token()
        user = User(
            email=email,
            name="Test User",
            provider=provider,
            email_verified=email_verified,
            activation_digest=hash_activation_token(token),
            role=role,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user, token

    return _make_user


@pytest.fixture()
def outbox() -> list[tuple[str, str]]:
    return []


@pytest.fixture()
def fake_mailer(outbox):
    def _send(email: str, activation_url: str) -> bool:
        outbox.append((email, activation_url))
        return True

    return _send
