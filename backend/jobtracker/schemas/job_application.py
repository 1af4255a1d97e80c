from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator


class JobApplicationIn(BaseModel):
    """Body of create and full-replace update requests."""

    company_name: str | None = None
    job_title: str | None = None
    job_url: str | None = None
    location: str | None = None
    salary_range: str | None = None
    application_date: date | None = None
    status: str | None = None
    description: str | None = None
    requirements: str | None = None
    notes: str | None = None
    contact_person: str | None = None
    contact_email: str | None = None
    follow_up_date: date | None = None

    @field_validator("application_date", "follow_up_date", mode="before")
    @classmethod
    def _blank_date_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class JobApplicationOut(BaseModel):
    id: int
    user_id: int
    company_name: str
    job_title: str
    job_url: str | None = None
    location: str | None = None
    salary_range: str | None = None
    application_date: date | None = None
    status: str
    description: str | None = None
    requirements: str | None = None
    notes: str | None = None
    contact_person: str | None = None
    contact_email: str | None = None
    follow_up_date: date | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class PaginationOut(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int = Field(alias="totalPages")

    class Config:
        populate_by_name = True


class JobApplicationListResponse(BaseModel):
    jobs: list[JobApplicationOut]
    pagination: PaginationOut


class JobApplicationDeleteResponse(BaseModel):
    message: str
    deleted: JobApplicationOut


class JobStatsOut(BaseModel):
    total: int = 0
    applied: int = 0
    interview: int = 0
    offer: int = 0
    rejected: int = 0
    withdrawn: int = 0
