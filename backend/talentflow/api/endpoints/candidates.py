"""
Candidates API endpoints.

Pipeline listing, candidate detail, stage transitions and stage history.
"""

from datetime import datetime
from typing import Literal, Optional
import logging

from fastapi import APIRouter, Depends, Query
from pydantic import Field
from sqlalchemy.orm import Session

from talentflow.api.common import CamelModel, Pagination, error_response
from talentflow.api.endpoints.jobs import JobResponse
from talentflow.core.config import settings
from talentflow.db.session import get_db
from talentflow.services import candidates as candidates_service
from talentflow.services.network import NetworkSimulator, get_network

logger = logging.getLogger("candidates")

router = APIRouter()

Stage = Literal["applied", "screen", "tech", "offer", "hired", "rejected"]


# ============== Pydantic Schemas ==============


class CandidateResponse(CamelModel):
    """Schema for a candidate joined with the job they applied to."""

    id: int
    name: str
    email: str
    stage: str
    job_id: Optional[int] = None
    phone: Optional[str] = None
    experience: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    job: Optional[JobResponse] = None  # None when the job no longer exists


class CandidateUpdate(CamelModel):
    """
    Schema for a partial candidate update.

    ``notes`` only annotates the timeline entry written on a stage change.
    """

    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = None
    stage: Optional[Stage] = None
    job_id: Optional[int] = None
    phone: Optional[str] = None
    experience: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None


class CandidateListResponse(CamelModel):
    candidates: list[CandidateResponse]
    pagination: Pagination


class TimelineEntry(CamelModel):
    """Schema for one stage-history entry."""

    id: int
    candidate_id: int
    stage: str
    timestamp: datetime
    notes: Optional[str] = None


# ============== API Endpoints ==============


@router.get("", response_model=CandidateListResponse)
async def list_candidates(
    search: str = "",
    stage: str = "",
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, alias="pageSize"),
    db: Session = Depends(get_db),
    network: NetworkSimulator = Depends(get_network),
):
    """List candidates, newest first, each joined with its job."""
    candidates, total = candidates_service.list_candidates(
        db, search=search, stage=stage, page=page, page_size=page_size
    )
    result = [CandidateResponse.model_validate(candidate) for candidate in candidates]

    await network.pause(settings.CANDIDATES_LIST_DELAY_MS)

    return CandidateListResponse(
        candidates=result,
        pagination=Pagination.build(page, page_size, total),
    )


@router.get("/{candidate_id}", response_model=CandidateResponse)
async def get_candidate(candidate_id: int, db: Session = Depends(get_db)):
    candidate = candidates_service.get_candidate(db, candidate_id)
    if not candidate:
        return error_response(404, "Candidate not found")
    return CandidateResponse.model_validate(candidate)


@router.patch("/{candidate_id}", response_model=CandidateResponse)
async def update_candidate(
    candidate_id: int,
    updates: CandidateUpdate,
    db: Session = Depends(get_db),
    network: NetworkSimulator = Depends(get_network),
):
    """
    Apply a partial update to a candidate.

    A change of stage also appends one timeline entry, annotated with
    ``notes`` when given.
    """
    try:
        await network.write()

        changes = updates.model_dump(exclude_unset=True, exclude_none=True)
        notes = changes.pop("notes", None)

        candidate = candidates_service.update_candidate(db, candidate_id, changes, notes=notes)
        if not candidate:
            return error_response(404, "Candidate not found")
        return CandidateResponse.model_validate(candidate)
    except Exception as e:
        db.rollback()
        logger.exception(f"Failed to update candidate {candidate_id}")
        return error_response(500, f"Failed to update candidate: {e}")


@router.get("/{candidate_id}/timeline", response_model=list[TimelineEntry])
async def get_candidate_timeline(candidate_id: int, db: Session = Depends(get_db)):
    """Stage history for a candidate, oldest first."""
    entries = candidates_service.get_timeline(db, candidate_id)
    return [TimelineEntry.model_validate(entry) for entry in entries]
