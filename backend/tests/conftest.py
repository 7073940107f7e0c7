import os

# Keep the app's own engine off disk; every test uses test_engine below.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

import matchday.models  # noqa: E402,F401
from matchday.database import get_session  # noqa: E402
from matchday.main import app  # noqa: E402
from matchday.models.team import Team  # noqa: E402
from matchday.models.team_member import ROLE_CAPTAIN, TeamMember  # noqa: E402

TEST_DATABASE_URL = "sqlite:///:memory:"

# ============================================================================
# Test Database Setup with StaticPool
# ============================================================================
# 1. sqlite:///:memory: with StaticPool so ALL sessions share the same DB
# 2. check_same_thread=False required for TestClient/threaded access
# 3. Tables are created before and dropped after every test
# 4. App dependency overridden to use test_engine (see client_fixture)
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


def override_get_session():
    """Override session to use test engine"""
    with Session(test_engine) as session:
        yield session


@pytest.fixture(name="session", scope="function")
def session_fixture():
    """Provide a test database session on a fresh schema"""
    SQLModel.metadata.create_all(test_engine)

    with Session(test_engine) as session:
        yield session

    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Provide a test client with overridden database session

    Override MUST be set BEFORE TestClient() and stay in place for the
    entire duration so the app never uses its own engine.
    """
    app.dependency_overrides[get_session] = override_get_session

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture(name="make_team")
def make_team_fixture(session: Session):
    """Factory: create a team with a captain membership and optional extra players."""

    def _make(name: str, captain_id: int, zone_id: int = 1, players=(), status: str = "ACTIVE") -> Team:
        team = Team(name=name, zone_id=zone_id, captain_id=captain_id, status=status)
        session.add(team)
        session.flush()
        session.add(TeamMember(team_id=team.id, user_id=captain_id, role=ROLE_CAPTAIN, jersey_number=10))
        for player_id in players:
            session.add(TeamMember(team_id=team.id, user_id=player_id))
        session.commit()
        session.refresh(team)
        return team

    return _make
