"""
Jobs API endpoints.

Job board listing, creation, editing and drag-and-drop reordering.
"""

from datetime import datetime
from typing import Literal, Optional
import logging

from fastapi import APIRouter, Depends, Query
from pydantic import Field
from sqlalchemy.orm import Session

from talentflow.api.common import CamelModel, Pagination, error_response
from talentflow.core.config import settings
from talentflow.db.session import get_db
from talentflow.services import jobs as jobs_service
from talentflow.services.exceptions import InvalidSortError, NotFoundError, SlugConflictError
from talentflow.services.network import NetworkSimulator, get_network

logger = logging.getLogger("jobs")

router = APIRouter()

JobStatus = Literal["active", "archived"]


# ============== Pydantic Schemas ==============


class JobResponse(CamelModel):
    """Schema for a job as returned to the board."""

    id: int
    title: str
    slug: str
    status: str
    tags: list[str] = []
    order: int
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class JobCreate(CamelModel):
    """Schema for creating a job. The slug is derived from the title when omitted."""

    title: str = Field(min_length=1)
    slug: Optional[str] = Field(default=None, min_length=1)
    status: Optional[JobStatus] = None
    tags: list[str] = []
    description: Optional[str] = None


class JobUpdate(CamelModel):
    """Schema for a partial job update."""

    title: Optional[str] = Field(default=None, min_length=1)
    slug: Optional[str] = Field(default=None, min_length=1)
    status: Optional[JobStatus] = None
    tags: Optional[list[str]] = None
    description: Optional[str] = None


class JobListResponse(CamelModel):
    jobs: list[JobResponse]
    pagination: Pagination


class ReorderRequest(CamelModel):
    """Schema for moving a job from one board position to another."""

    from_order: int = Field(ge=0)
    to_order: int = Field(ge=0)


# ============== API Endpoints ==============


@router.get("", response_model=JobListResponse)
async def list_jobs(
    search: str = "",
    status: str = "",
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, alias="pageSize"),
    sort: str = "order",
    db: Session = Depends(get_db),
    network: NetworkSimulator = Depends(get_network),
):
    """
    List jobs for the board.

    Search matches the title or any tag, case-insensitively. ``sort`` takes a
    field name with an optional leading ``-`` for descending order.
    """
    try:
        jobs, total = jobs_service.list_jobs(
            db, search=search, status=status, page=page, page_size=page_size, sort=sort
        )
    except InvalidSortError as e:
        return error_response(400, str(e))

    await network.pause(settings.JOBS_LIST_DELAY_MS)

    return JobListResponse(
        jobs=[JobResponse.model_validate(job) for job in jobs],
        pagination=Pagination.build(page, page_size, total),
    )


@router.post("", response_model=JobResponse)
async def create_job(
    job_in: JobCreate,
    db: Session = Depends(get_db),
    network: NetworkSimulator = Depends(get_network),
):
    """Create a job at the end of the board. Duplicate slugs are rejected with 400."""
    try:
        await network.write()
        job = jobs_service.create_job(db, job_in.model_dump(exclude_unset=True))
        return JobResponse.model_validate(job)
    except SlugConflictError as e:
        return error_response(400, str(e))
    except Exception as e:
        db.rollback()
        logger.exception("Failed to create job")
        return error_response(500, f"Failed to create job: {e}")


@router.patch("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: int,
    updates: JobUpdate,
    db: Session = Depends(get_db),
    network: NetworkSimulator = Depends(get_network),
):
    """Apply a partial update to a job, keeping slugs unique."""
    try:
        await network.write()
        job = jobs_service.update_job(
            db, job_id, updates.model_dump(exclude_unset=True, exclude_none=True)
        )
        return JobResponse.model_validate(job)
    except SlugConflictError as e:
        return error_response(400, str(e))
    except NotFoundError as e:
        return error_response(404, str(e))
    except Exception as e:
        db.rollback()
        logger.exception(f"Failed to update job {job_id}")
        return error_response(500, f"Failed to update job: {e}")


@router.patch("/{job_id}/reorder")
async def reorder_job(
    job_id: int,
    move: ReorderRequest,
    db: Session = Depends(get_db),
    network: NetworkSimulator = Depends(get_network),
):
    """
    Move a job to a new board position.

    Every job's order is rewritten in a single transaction so the board stays
    a gap-free 0..N-1 sequence.
    """
    try:
        await network.write()
        jobs_service.reorder_job(db, job_id, move.from_order, move.to_order)
        return {"success": True}
    except Exception as e:
        db.rollback()
        logger.exception(f"Failed to reorder job {job_id}")
        return error_response(500, f"Failed to reorder job: {e}")
