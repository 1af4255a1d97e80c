from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date

from sqlalchemy.orm import Query, Session

from jobtracker.config import settings
from jobtracker.errors import NotFoundError, ValidationError
from jobtracker.models.job_application import DEFAULT_STATUS, JOB_STATUSES, MAX_RECORD_ID, JobApplication
from jobtracker.models.timestamps import utcnow
from jobtracker.schemas.job_application import JobApplicationIn


logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Job application not found"
REQUIRED_FIELDS_MESSAGE = "Company name and job title are required"


@dataclass
class JobApplicationPage:
    jobs: list[JobApplication]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.limit)


def sanitize_positive_int(raw: str | int | None, default: int, maximum: int | None = None) -> int:
    """Coerce a query value to a positive integer, falling back to ``default``."""
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        value = default
    if value < 1:
        value = default
    if maximum is not None:
        value = min(value, maximum)
    return value


def total_pages(total: int, limit: int) -> int:
    if limit < 1:
        return 0
    return math.ceil(total / limit)


def parse_job_id(raw: str) -> int:
    value = (raw or "").strip()
    if not value.isdigit() or not value.isascii() or int(value) < 1:
        raise ValidationError("Invalid job ID")
    job_id = int(value)
    if job_id > MAX_RECORD_ID:
        # cannot exist in the table
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return job_id


def _owned(db: Session, user_id: int) -> Query:
    return db.query(JobApplication).filter(JobApplication.user_id == user_id)


def _field_values(payload: JobApplicationIn) -> dict:
    company_name = (payload.company_name or "").strip()
    job_title = (payload.job_title or "").strip()
    if not company_name or not job_title:
        raise ValidationError(REQUIRED_FIELDS_MESSAGE)

    status = (payload.status or "").strip() or DEFAULT_STATUS
    if status not in JOB_STATUSES:
        raise ValidationError(f"Status must be one of: {', '.join(JOB_STATUSES)}")

    values = payload.model_dump()
    values.update(company_name=company_name, job_title=job_title, status=status)
    return values


def list_job_applications(
    db: Session,
    user_id: int,
    *,
    status: str | None = None,
    company: str | None = None,
    page: str | int | None = None,
    limit: str | int | None = None,
) -> JobApplicationPage:
    page_number = sanitize_positive_int(page, 1)
    page_size = sanitize_positive_int(limit, settings.default_page_size, settings.max_page_size)

    query = _owned(db, user_id)
    if status and status.strip():
        query = query.filter(JobApplication.status == status.strip())
    if company and company.strip():
        query = query.filter(JobApplication.company_name.icontains(company.strip(), autoescape=True))

    total = query.count()
    offset = (page_number - 1) * page_size
    if offset >= total:
        return JobApplicationPage(jobs=[], page=page_number, limit=page_size, total=total)

    jobs = (
        query.order_by(JobApplication.created_at.desc(), JobApplication.id.desc())
        .offset(offset)
        .limit(page_size)
        .all()
    )
    return JobApplicationPage(jobs=jobs, page=page_number, limit=page_size, total=total)


def get_job_application(db: Session, user_id: int, job_id: int) -> JobApplication:
    job = _owned(db, user_id).filter(JobApplication.id == job_id).first()
    if not job:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return job


def create_job_application(db: Session, user_id: int, payload: JobApplicationIn) -> JobApplication:
    values = _field_values(payload)
    if values["application_date"] is None:
        values["application_date"] = date.today()

    job = JobApplication(user_id=user_id, **values)
    db.add(job)
    db.commit()
    db.refresh(job)
    logger.info("Created job application %s for user %s", job.id, user_id)
    return job


def update_job_application(
    db: Session,
    user_id: int,
    job_id: int,
    payload: JobApplicationIn,
) -> JobApplication:
    values = _field_values(payload)
    job = get_job_application(db, user_id, job_id)

    # full replace: fields missing from the payload are cleared
    for name, value in values.items():
        setattr(job, name, value)
    job.updated_at = utcnow()
    db.add(job)
    db.commit()
    db.refresh(job)
    logger.info("Updated job application %s for user %s", job.id, user_id)
    return job


def delete_job_application(db: Session, user_id: int, job_id: int) -> JobApplication:
    job = get_job_application(db, user_id, job_id)
    db.delete(job)
    db.commit()
    logger.info("Deleted job application %s for user %s", job_id, user_id)
    return job
