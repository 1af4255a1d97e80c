from jobtracker.schemas.auth import AuthResponse, LoginRequest, MeResponse, RegisterRequest, UserOut
from jobtracker.schemas.job_application import (
    JobApplicationDeleteResponse,
    JobApplicationIn,
    JobApplicationListResponse,
    JobApplicationOut,
    JobStatsOut,
    PaginationOut,
)

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "UserOut",
    "AuthResponse",
    "MeResponse",
    "JobApplicationIn",
    "JobApplicationOut",
    "JobApplicationListResponse",
    "JobApplicationDeleteResponse",
    "JobStatsOut",
    "PaginationOut",
]
