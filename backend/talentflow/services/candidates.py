"""
Candidate pipeline operations.

Stage changes are the only mutation with a side effect: each one appends a
row to the candidate's timeline.
"""

import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from talentflow.db import store
from talentflow.db.base import utcnow
from talentflow.models import Candidate, CandidateTimeline
from talentflow.services.jobs import paginate

logger = logging.getLogger("candidates")

UPDATABLE_FIELDS = {"name", "email", "stage", "job_id", "phone", "experience"}


def _matches_search(candidate: Candidate, needle: str) -> bool:
    return needle in (candidate.name or "").lower() or needle in (candidate.email or "").lower()


def list_candidates(
    db: Session,
    search: str = "",
    stage: str = "",
    page: int = 1,
    page_size: int = 50,
) -> tuple[list[Candidate], int]:
    """Newest candidates first, filtered by name/email substring and stage."""
    needle = search.lower()

    def predicate(candidate: Candidate) -> bool:
        if needle and not _matches_search(candidate, needle):
            return False
        if stage and candidate.stage != stage:
            return False
        return True

    candidates = store.traverse(db, Candidate, "created_at", descending=True, predicate=predicate)
    return paginate(candidates, page, page_size), len(candidates)


def get_candidate(db: Session, candidate_id: int) -> Optional[Candidate]:
    return store.get(db, Candidate, candidate_id)


def stage_change_note(old_stage: str, new_stage: str) -> str:
    return f"Stage updated from {old_stage} to {new_stage}"


def update_candidate(
    db: Session,
    candidate_id: int,
    changes: dict[str, Any],
    notes: Optional[str] = None,
) -> Optional[Candidate]:
    """
    Merge ``changes`` into a candidate.

    Returns None when the candidate does not exist. When the stage changes a
    timeline entry is written in the same commit, using ``notes`` or a
    generated "from -> to" description.
    """
    candidate = store.get(db, Candidate, candidate_id)
    if candidate is None:
        return None

    old_stage = candidate.stage
    now = utcnow()

    merged = {key: value for key, value in changes.items() if key in UPDATABLE_FIELDS}
    merged["updated_at"] = now
    store.update(db, Candidate, candidate_id, merged)

    new_stage = merged.get("stage")
    if new_stage and new_stage != old_stage:
        store.add(
            db,
            CandidateTimeline(
                candidate_id=candidate_id,
                stage=new_stage,
                timestamp=now,
                notes=notes or stage_change_note(old_stage, new_stage),
            ),
        )
        logger.info(f"Candidate {candidate_id} moved {old_stage} -> {new_stage}")

    db.commit()
    db.refresh(candidate)
    return candidate


def get_timeline(db: Session, candidate_id: int) -> list[CandidateTimeline]:
    """Timeline entries for a candidate, oldest first."""
    return (
        db.query(CandidateTimeline)
        .filter(CandidateTimeline.candidate_id == candidate_id)
        .order_by(CandidateTimeline.timestamp.asc(), CandidateTimeline.id.asc())
        .all()
    )
