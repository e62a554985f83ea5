import os
import uuid
from collections.abc import Callable, Generator
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite://')
os.environ.setdefault('JWT_SECRET_KEY', 'test-access-secret-32-chars-min-0001')
os.environ.setdefault('APP_ENV', 'test')
os.environ.setdefault('CORS_ORIGINS', 'http://localhost:3001')

from testgate.api.deps import get_now
from testgate.core.security import create_access_token
from testgate.db.base import Base
from testgate.db.session import get_db
from testgate.main import app
from testgate.models import Club, Membership, Team, Test, TestAssignment


NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)

engine = create_engine(
    'sqlite://',
    connect_args={'check_same_thread': False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


@pytest.fixture(autouse=True)
def setup_database() -> Generator[None, None, None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session() -> Generator[Session, None, None]:
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def clock() -> dict[str, datetime]:
    """Mutable request clock; tests move ``clock['now']`` to step through time."""
    return {'now': NOW}


@pytest.fixture()
def client(db_session: Session, clock: dict[str, datetime]) -> Generator[TestClient, None, None]:
    def _override_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = _override_db
    app.dependency_overrides[get_now] = lambda: clock['now']

    with TestClient(app) as api_client:
        yield api_client

    app.dependency_overrides.clear()


def auth_header(user_id: Any) -> dict[str, str]:
    return {'Authorization': f'Bearer {create_access_token(str(user_id))}'}


@pytest.fixture()
def auth() -> Callable[[Membership], dict[str, str]]:
    return lambda membership: auth_header(membership.user_id)


@pytest.fixture()
def club(db_session: Session) -> Club:
    item = Club(name='Test Club')
    db_session.add(item)
    db_session.commit()
    return item


@pytest.fixture()
def team(db_session: Session, club: Club) -> Team:
    item = Team(club_id=club.id, name='Team A')
    db_session.add(item)
    db_session.commit()
    return item


@pytest.fixture()
def make_member(db_session: Session, club: Club) -> Callable[..., Membership]:
    def _make(*, role: str = 'MEMBER', team_id: Any = None, club_id: Any = None) -> Membership:
        membership = Membership(
            user_id=uuid.uuid4(),
            club_id=club_id or club.id,
            team_id=team_id,
            role=role,
        )
        db_session.add(membership)
        db_session.commit()
        return membership

    return _make


@pytest.fixture()
def admin(make_member: Callable[..., Membership]) -> Membership:
    return make_member(role='ADMIN')


@pytest.fixture()
def member(make_member: Callable[..., Membership]) -> Membership:
    return make_member()


@pytest.fixture()
def make_test(db_session: Session, club: Club) -> Callable[..., Test]:
    def _make(*, assignments: list[dict[str, Any]] | None = None, **fields: Any) -> Test:
        values: dict[str, Any] = {
            'club_id': club.id,
            'name': 'Practice test',
            'status': 'PUBLISHED',
            'score_release_mode': 'FULL_TEST',
            'created_at': NOW - timedelta(days=1),
        }
        values.update(fields)
        test = Test(**values)
        if assignments is None:
            assignments = [{'assigned_scope': 'CLUB'}]
        test.assignments = [TestAssignment(**rule) for rule in assignments]
        db_session.add(test)
        db_session.commit()
        return test

    return _make
