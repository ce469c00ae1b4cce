"""
Shared fixtures: an in-memory SQLite database per test, a session bound to it,
and a TestClient whose get_db dependency points at the same database.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from evaluator import models  # noqa: F401  (registers tables)
from evaluator.db.base import Base
from evaluator.db.json_fields import dumps
from evaluator.db.session import get_db
from evaluator.main import app
from evaluator.services.rubric_catalog import get_rubric


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_candidate(db):
    """Factory inserting a candidate; keyword arguments override the defaults."""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        n = counter["n"]
        fields = {
            "first_name": f"First{n}",
            "last_name": f"Last{n}",
            "email": f"candidate{n}@example.com",
            "primary_skill": "Python",
            "secondary_skills": dumps(["SQL", "Docker"]),
            "location": "Austin, TX",
            "years_experience": 5,
        }
        fields.update(overrides)
        candidate = models.Candidate(**fields)
        db.add(candidate)
        db.commit()
        db.refresh(candidate)
        return candidate

    return _make


@pytest.fixture
def scores_for():
    """Builds a complete score set with every category at ``fraction`` of its max."""
    def _scores(prompt_id, fraction=1.0):
        rubric = get_rubric(prompt_id)
        return {key: c.max_score * fraction for key, c in rubric.categories.items()}

    return _scores
