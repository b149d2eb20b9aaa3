"""
Job board operations.

Listing with search/filter/sort/pagination, creation with slug uniqueness and
dense ordering, partial updates and drag-and-drop style reordering.
"""

import logging
import re
from contextlib import contextmanager
from typing import Any, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from talentflow.db import store
from talentflow.db.base import utcnow
from talentflow.models import Job
from talentflow.services.exceptions import InvalidSortError, NotFoundError, SlugConflictError

logger = logging.getLogger("jobs")

# Public sort key -> model attribute
SORT_FIELDS = {
    "id": "id",
    "title": "title",
    "slug": "slug",
    "status": "status",
    "order": "order",
    "createdAt": "created_at",
    "created_at": "created_at",
}

UPDATABLE_FIELDS = {"title", "slug", "status", "tags", "description"}


def slugify(title: str) -> str:
    """Lowercase ``title`` and collapse every run of non-alphanumerics to one hyphen."""
    return re.sub(r"[^a-z0-9]+", "-", title.lower())


def paginate(items: list[Any], page: int, page_size: int) -> list[Any]:
    start = (page - 1) * page_size
    return items[start:start + page_size]


def _matches_search(job: Job, needle: str) -> bool:
    if needle in (job.title or "").lower():
        return True
    return any(needle in str(tag).lower() for tag in (job.tags or []))


def list_jobs(
    db: Session,
    search: str = "",
    status: str = "",
    page: int = 1,
    page_size: int = 10,
    sort: str = "order",
) -> tuple[list[Job], int]:
    """
    Return one page of jobs and the total number of matches.

    ``sort`` names a field from SORT_FIELDS; a leading ``-`` sorts descending.
    """
    descending = sort.startswith("-")
    sort_key = sort[1:] if descending else sort
    field = SORT_FIELDS.get(sort_key)
    if field is None:
        raise InvalidSortError(f"Unsupported sort field: {sort_key}")

    needle = search.lower()

    def predicate(job: Job) -> bool:
        if needle and not _matches_search(job, needle):
            return False
        if status and job.status != status:
            return False
        return True

    jobs = store.traverse(db, Job, field, descending=descending, predicate=predicate)
    return paginate(jobs, page, page_size), len(jobs)


def next_order(db: Session) -> int:
    """Order value for a job appended to the end of the board."""
    max_order = db.query(func.max(Job.order)).scalar()
    return 0 if max_order is None else max_order + 1


@contextmanager
def slug_guard(db: Session):
    """Commit the job writes made in the block; a slug unique-constraint hit becomes SlugConflictError."""
    try:
        yield
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if "slug" in str(e.orig):
            raise SlugConflictError() from e
        raise


def create_job(db: Session, data: dict[str, Any]) -> Job:
    """
    Insert a job at the end of the board.

    The slug defaults to the slugified title. Raises SlugConflictError (and
    writes nothing) when the slug is taken.
    """
    slug = data.get("slug") or slugify(data["title"])

    if store.find_first(db, Job, slug=slug):
        raise SlugConflictError()

    job = Job(
        title=data["title"],
        slug=slug,
        status=data.get("status") or "active",
        tags=list(data.get("tags") or []),
        description=data.get("description"),
        order=next_order(db),
        created_at=utcnow(),
    )
    with slug_guard(db):
        store.add(db, job)
    db.refresh(job)

    logger.info(f"Created job {job.id} '{job.slug}' at order {job.order}")
    return job


def update_job(db: Session, job_id: int, changes: dict[str, Any]) -> Job:
    """Merge ``changes`` into a job, keeping slugs unique."""
    job = store.get(db, Job, job_id)
    if job is None:
        raise NotFoundError("Job not found")

    slug = changes.get("slug")
    if slug is not None:
        clash = db.query(Job).filter(Job.slug == slug, Job.id != job_id).first()
        if clash:
            raise SlugConflictError()

    merged = {key: value for key, value in changes.items() if key in UPDATABLE_FIELDS}
    merged["updated_at"] = utcnow()
    with slug_guard(db):
        store.update(db, Job, job_id, merged)
    db.refresh(job)
    return job


def reorder_index(from_order: int, to_order: int) -> int:
    """
    Index to reinsert a moved job at, after it was removed from the list.

    Moving forward shifts every later index down by one, so the target is
    ``to_order - 1``; moving backward (or in place) uses ``to_order``.
    """
    return to_order - 1 if from_order < to_order else to_order


def reorder_job(db: Session, job_id: int, from_order: int, to_order: int) -> list[Job]:
    """
    Move a job and rewrite the whole board as a dense 0..N-1 sequence.

    All order updates are committed in one transaction.
    """
    jobs = store.traverse(db, Job, "order")

    moving_index = next((i for i, job in enumerate(jobs) if job.id == job_id), None)
    if moving_index is None:
        raise NotFoundError("Job not found")

    moving_job = jobs.pop(moving_index)
    new_index = max(0, min(reorder_index(from_order, to_order), len(jobs)))
    jobs.insert(new_index, moving_job)

    with store.transaction(db):
        for index, job in enumerate(jobs):
            if job.order != index:
                store.update(db, Job, job.id, {"order": index})

    logger.info(f"Moved job {job_id} from {from_order} to index {new_index}")
    return jobs
