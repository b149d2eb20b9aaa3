"""
Assessment builder and submission operations.

Each job owns at most one assessment; saving is an upsert keyed by job id.
"""

import logging
import random
from typing import Any, Optional

from sqlalchemy.orm import Session

from talentflow.db import store
from talentflow.db.base import utcnow
from talentflow.models import Assessment, AssessmentResponse

logger = logging.getLogger("assessments")

UPDATABLE_FIELDS = {"title", "sections", "is_active"}

MIN_SCORE = 60
MAX_SCORE = 99


def get_assessment_for_job(db: Session, job_id: int) -> Optional[Assessment]:
    return store.find_first(db, Assessment, job_id=job_id)


def save_assessment(db: Session, job_id: int, data: dict[str, Any]) -> Assessment:
    """Update the job's assessment if it has one, otherwise create it."""
    fields = {key: value for key, value in data.items() if key in UPDATABLE_FIELDS}
    now = utcnow()

    existing = get_assessment_for_job(db, job_id)
    if existing:
        fields["updated_at"] = now
        store.update(db, Assessment, existing.id, fields)
        db.commit()
        db.refresh(existing)
        logger.info(f"Updated assessment {existing.id} for job {job_id}")
        return existing

    assessment = Assessment(job_id=job_id, created_at=now, updated_at=now, **fields)
    store.add(db, assessment)
    db.commit()
    db.refresh(assessment)
    logger.info(f"Created assessment {assessment.id} for job {job_id}")
    return assessment


def synthetic_score(rng: Optional[random.Random] = None) -> int:
    """Placeholder grade for a submission, uniform over MIN_SCORE..MAX_SCORE."""
    return (rng or random).randint(MIN_SCORE, MAX_SCORE)


def submit_response(
    db: Session,
    job_id: int,
    candidate_id: int,
    responses: dict[str, Any],
    rng: Optional[random.Random] = None,
) -> AssessmentResponse:
    """
    Store a candidate's answers against the job's assessment.

    Submissions are recorded even when the job has no assessment yet, in which
    case ``assessment_id`` is left empty.
    """
    assessment = get_assessment_for_job(db, job_id)

    response = AssessmentResponse(
        assessment_id=assessment.id if assessment else None,
        candidate_id=candidate_id,
        responses=responses,
        submitted_at=utcnow(),
        score=synthetic_score(rng),
    )
    store.add(db, response)
    db.commit()
    return response
