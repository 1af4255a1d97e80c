from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobtracker.auth import TokenClaims, get_current_claims
from jobtracker.database import get_db
from jobtracker.schemas.job_application import (
    JobApplicationDeleteResponse,
    JobApplicationIn,
    JobApplicationListResponse,
    JobApplicationOut,
    PaginationOut,
)
from jobtracker.services import job_applications as service


router = APIRouter()


@router.get("", response_model=JobApplicationListResponse)
def list_job_applications(
    status: str | None = None,
    company: str | None = None,
    page: str | None = None,
    limit: str | None = None,
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims),
) -> JobApplicationListResponse:
    result = service.list_job_applications(
        db,
        claims.user_id,
        status=status,
        company=company,
        page=page,
        limit=limit,
    )
    return JobApplicationListResponse(
        jobs=[JobApplicationOut.model_validate(job) for job in result.jobs],
        pagination=PaginationOut(
            page=result.page,
            limit=result.limit,
            total=result.total,
            total_pages=result.total_pages,
        ),
    )


@router.get("/{job_id}", response_model=JobApplicationOut)
def get_job_application(
    job_id: str,
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims),
) -> JobApplicationOut:
    job = service.get_job_application(db, claims.user_id, service.parse_job_id(job_id))
    return JobApplicationOut.model_validate(job)


@router.post("", response_model=JobApplicationOut, status_code=201)
def create_job_application(
    payload: JobApplicationIn,
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims),
) -> JobApplicationOut:
    job = service.create_job_application(db, claims.user_id, payload)
    return JobApplicationOut.model_validate(job)


@router.put("/{job_id}", response_model=JobApplicationOut)
def update_job_application(
    job_id: str,
    payload: JobApplicationIn,
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims),
) -> JobApplicationOut:
    job = service.update_job_application(db, claims.user_id, service.parse_job_id(job_id), payload)
    return JobApplicationOut.model_validate(job)


@router.delete("/{job_id}", response_model=JobApplicationDeleteResponse)
def delete_job_application(
    job_id: str,
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims),
) -> JobApplicationDeleteResponse:
    job = service.delete_job_application(db, claims.user_id, service.parse_job_id(job_id))
    return JobApplicationDeleteResponse(
        message="Job application deleted successfully",
        deleted=JobApplicationOut.model_validate(job),
    )
