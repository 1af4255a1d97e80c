from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobtracker.auth import TokenClaims, get_current_claims
from jobtracker.database import get_db
from jobtracker.schemas.job_application import JobStatsOut
from jobtracker.services.stats import job_status_counts


router = APIRouter()


@router.get("", response_model=JobStatsOut)
def job_stats(
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims),
) -> JobStatsOut:
    return job_status_counts(db, claims.user_id)
