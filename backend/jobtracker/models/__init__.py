from jobtracker.models.job_application import DEFAULT_STATUS, JOB_STATUSES, JobApplication
from jobtracker.models.user import User

__all__ = ["User", "JobApplication", "JOB_STATUSES", "DEFAULT_STATUS"]
