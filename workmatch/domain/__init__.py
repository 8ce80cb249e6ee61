"""Domain value types shared by matching, persistence, and the CLI."""

from .models import JobPosting, JobStatus, WorkerProfile, WorkType, parse_work_type

__all__ = [
    "JobPosting",
    "JobStatus",
    "WorkerProfile",
    "WorkType",
    "parse_work_type",
]
