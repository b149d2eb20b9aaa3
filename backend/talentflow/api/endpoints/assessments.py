"""
Assessment API endpoints.

Per-job assessment builder (read and upsert) and candidate submissions.
"""

from datetime import datetime
from typing import Any, Literal, Optional
import logging

from fastapi import APIRouter, Depends
from pydantic import Field
from sqlalchemy.orm import Session

from talentflow.api.common import CamelModel, error_response
from talentflow.core.config import settings
from talentflow.db.session import get_db
from talentflow.services import assessments as assessments_service
from talentflow.services.network import NetworkSimulator, get_network

logger = logging.getLogger("assessments")

router = APIRouter()

QuestionType = Literal["single-choice", "multi-choice", "short-text", "long-text", "numeric", "file-upload"]


# ============== Pydantic Schemas ==============


class QuestionValidation(CamelModel):
    """Optional constraints on an answer."""

    min: Optional[float] = None
    max: Optional[float] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None


class Question(CamelModel):
    id: str
    type: QuestionType
    question: str = ""
    required: bool = False
    options: Optional[list[str]] = None
    validation: Optional[QuestionValidation] = None


class Section(CamelModel):
    id: str
    title: str
    questions: list[Question] = []


class AssessmentDetail(CamelModel):
    """Schema for a job's assessment."""

    id: int
    job_id: int
    title: Optional[str] = None
    sections: list[Section] = []
    is_active: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AssessmentSave(CamelModel):
    """Schema for saving (creating or replacing fields of) a job's assessment."""

    title: Optional[str] = None
    sections: Optional[list[Section]] = None
    is_active: Optional[bool] = None


class SubmissionRequest(CamelModel):
    """Schema for a candidate's assessment answers."""

    candidate_id: int
    responses: dict[str, Any] = Field(default_factory=dict)


class SubmissionResponse(CamelModel):
    id: int
    success: bool = True
    message: str = "Assessment submitted successfully"


# ============== API Endpoints ==============


@router.get("/{job_id}", response_model=Optional[AssessmentDetail])
async def get_assessment(
    job_id: int,
    db: Session = Depends(get_db),
    network: NetworkSimulator = Depends(get_network),
):
    """Return the job's assessment, or null when it has none."""
    assessment = assessments_service.get_assessment_for_job(db, job_id)

    await network.pause(settings.ASSESSMENT_READ_DELAY_MS)

    if assessment is None:
        return None
    return AssessmentDetail.model_validate(assessment)


@router.put("/{job_id}", response_model=AssessmentDetail)
async def save_assessment(
    job_id: int,
    assessment_in: AssessmentSave,
    db: Session = Depends(get_db),
    network: NetworkSimulator = Depends(get_network),
):
    """Create the job's assessment, or update it if one already exists."""
    try:
        await network.write()

        # sections are stored as plain JSON with camelCase keys
        data = assessment_in.model_dump(exclude_unset=True, exclude_none=True)
        if assessment_in.sections is not None:
            data["sections"] = [
                section.model_dump(by_alias=True, exclude_none=True)
                for section in assessment_in.sections
            ]

        assessment = assessments_service.save_assessment(db, job_id, data)
        return AssessmentDetail.model_validate(assessment)
    except Exception as e:
        db.rollback()
        logger.exception(f"Failed to save assessment for job {job_id}")
        return error_response(500, f"Failed to save assessment: {e}")


@router.post("/{job_id}/submit", response_model=SubmissionResponse)
async def submit_assessment(
    job_id: int,
    submission: SubmissionRequest,
    db: Session = Depends(get_db),
    network: NetworkSimulator = Depends(get_network),
):
    """Record a candidate's answers with a synthetic score."""
    try:
        await network.pause(settings.SUBMIT_DELAY_MS)

        response = assessments_service.submit_response(
            db, job_id, submission.candidate_id, submission.responses
        )
        return SubmissionResponse(id=response.id)
    except Exception as e:
        db.rollback()
        logger.exception(f"Failed to submit assessment for job {job_id}")
        return error_response(500, f"Failed to submit assessment: {e}")
