from __future__ import annotations

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from jobtracker.database import Base
from jobtracker.models.timestamps import utcnow


# upper bound of the INTEGER primary key column
MAX_RECORD_ID = 2**31 - 1

JOB_STATUSES = ("applied", "interview", "offer", "rejected", "withdrawn")
DEFAULT_STATUS = "applied"


class JobApplication(Base):
    __tablename__ = "job_applications"
    __table_args__ = (
        Index("idx_job_applications_status", "status"),
        Index("idx_job_applications_company", "company_name"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    company_name = Column(String(255), nullable=False)
    job_title = Column(String(255), nullable=False)
    job_url = Column(Text)
    location = Column(String(255))
    salary_range = Column(String(100))
    application_date = Column(Date)
    status = Column(String(50), default=DEFAULT_STATUS, nullable=False)
    description = Column(Text)
    requirements = Column(Text)
    notes = Column(Text)
    contact_person = Column(String(255))
    contact_email = Column(String(255))
    follow_up_date = Column(Date)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    user = relationship("User", back_populates="job_applications")

    def __repr__(self) -> str:
        return f"<JobApplication {self.id} {self.company_name!r} ({self.status})>"
