from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from talentflow.db.base import Base, utcnow
from talentflow.db.session import get_db
from talentflow.main import app
from talentflow.models import Job, Candidate, CandidateTimeline
from talentflow.services.network import NetworkSimulator, get_network


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def network():
    """Simulator with latency and failures switched off."""
    return NetworkSimulator(enabled=False)


@pytest.fixture
def client(db_session, network):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_network] = lambda: network
    # no context manager: the startup lifespan (seeding the real database) is not run
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_job(db_session):
    def _make_job(title, **overrides):
        fields = {
            "title": title,
            "slug": title.lower().replace(" ", "-"),
            "status": "active",
            "tags": [],
            "order": db_session.query(Job).count(),
            "created_at": utcnow(),
        }
        fields.update(overrides)
        job = Job(**fields)
        db_session.add(job)
        db_session.commit()
        return job

    return _make_job


@pytest.fixture
def make_candidate(db_session):
    def _make_candidate(name, job=None, stage="applied", age_days=0, **overrides):
        created_at = utcnow() - timedelta(days=age_days)
        fields = {
            "name": name,
            "email": f"{name.lower().replace(' ', '.')}@email.com",
            "stage": stage,
            "job_id": job.id if job is not None else None,
            "created_at": created_at,
            "updated_at": created_at,
        }
        fields.update(overrides)
        candidate = Candidate(**fields)
        db_session.add(candidate)
        db_session.commit()
        db_session.add(CandidateTimeline(
            candidate_id=candidate.id,
            stage="applied",
            timestamp=created_at,
            notes="Application submitted via careers page",
        ))
        db_session.commit()
        return candidate

    return _make_candidate
