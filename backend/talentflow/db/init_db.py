import logging
import random
from typing import Optional

from sqlalchemy.orm import Session

from talentflow.core.config import settings
from talentflow.db.base import Base
from talentflow.db.session import SessionLocal, engine

# Import all models so SQLAlchemy can discover them for table creation
from talentflow.models import User, Job, Candidate, CandidateTimeline, Assessment, AssessmentResponse  # noqa: F401
from talentflow.services.seed import seed_database

logger = logging.getLogger("init_db")


def initialize_database(db: Optional[Session] = None) -> bool:
    """
    Create tables and seed them once.

    Safe to call on every start: seeding is skipped when jobs already exist.
    Returns True when seed data was written.
    """
    Base.metadata.create_all(bind=db.get_bind() if db is not None else engine)

    session = db or SessionLocal()
    try:
        rng = random.Random(settings.SEED_RANDOM_SEED)
        seeded = seed_database(session, rng=rng, candidate_count=settings.SEED_CANDIDATE_COUNT)
        logger.info("Database initialized successfully")
        return seeded
    finally:
        if db is None:
            session.close()
