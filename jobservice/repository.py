"""
Jobs Repository.

Responsibilities:
- One SQL statement per operation on the jobs table.
- Rows returned as plain dicts ready for JSON encoding.

Non-Responsibilities:
- No authorization.
- No input validation.
- No commit/rollback; the caller owns the transaction.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.orm import Session

from .database import STATUS_OPEN, jobs_table


def _row_to_dict(row) -> Dict[str, Any]:
    return dict(row._mapping)


def create_job(
    db: Session,
    company_id: Any,
    recruiter_id: Any,
    title: Optional[str],
    description: Optional[str],
) -> Dict[str, Any]:
    """
    Insert a new open job.

    Args:
        db: Database session
        company_id: Owning company reference (not checked)
        recruiter_id: Posting recruiter reference (not checked)
        title: Job title
        description: Job description

    Returns:
        The created row, including the generated job_id
    """
    stmt = (
        insert(jobs_table)
        .values(
            company_id=company_id,
            recruiter_id=recruiter_id,
            title=title,
            description=description,
            status=STATUS_OPEN,
        )
        .returning(*jobs_table.c)
    )
    return _row_to_dict(db.execute(stmt).one())


def list_open_jobs(db: Session) -> List[Dict[str, Any]]:
    """Return every job whose status is open."""
    stmt = select(jobs_table).where(jobs_table.c.status == STATUS_OPEN)
    return [_row_to_dict(row) for row in db.execute(stmt)]


def delete_job(db: Session, job_id: Any) -> None:
    """Delete a job by id. Deleting a missing id is a no-op."""
    db.execute(delete(jobs_table).where(jobs_table.c.job_id == job_id))


def update_job(
    db: Session,
    job_id: Any,
    title: Optional[str] = None,
    description: Optional[str] = None,
    status: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """
    Update mutable fields of a job. None keeps the stored value.

    Args:
        db: Database session
        job_id: Job to update
        title: New title, or None
        description: New description, or None
        status: New status, or None

    Returns:
        The updated row, or None if no job has that id
    """
    c = jobs_table.c
    stmt = (
        update(jobs_table)
        .where(c.job_id == job_id)
        .values(
            title=func.coalesce(title, c.title),
            description=func.coalesce(description, c.description),
            status=func.coalesce(status, c.status),
        )
        .returning(*jobs_table.c)
    )
    row = db.execute(stmt).first()
    return _row_to_dict(row) if row is not None else None
