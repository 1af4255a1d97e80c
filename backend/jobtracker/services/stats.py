from __future__ import annotations

from collections import Counter

from sqlalchemy import func
from sqlalchemy.orm import Session

from jobtracker.models.job_application import JOB_STATUSES, JobApplication
from jobtracker.schemas.job_application import JobStatsOut


def job_status_counts(db: Session, user_id: int) -> JobStatsOut:
    """Per-status tally of a user's applications.

    ``total`` counts every owned row, matching the unfiltered listing total.
    Rows carrying a status outside ``JOB_STATUSES`` (possible only in data
    written before statuses were validated) appear in ``total`` but in no
    per-status bucket.
    """
    rows = (
        db.query(JobApplication.status, func.count(JobApplication.id))
        .filter(JobApplication.user_id == user_id)
        .group_by(JobApplication.status)
        .all()
    )
    counts = Counter({status: int(count) for status, count in rows})
    return JobStatsOut(
        total=sum(counts.values()),
        **{status: counts.get(status, 0) for status in JOB_STATUSES},
    )
