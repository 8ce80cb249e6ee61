"""Dataset loading and database seeding.

A dataset is a YAML document listing workers and jobs:

    workers:
      - id: w-1
        name: Rajesh Kumar
        skills: [House Cleaning, Indian Cooking]
        hourly_rate: 15000
        city: Mumbai
        state: Maharashtra
        experience_years: 8
        preferred_work_types: [FULL_TIME, LIVE_OUT]
        is_available: true
    jobs:
      - id: j-1
        title: Full-time cook
        status: ACTIVE
        required_skills: [Indian Cooking]
        salary_amount: 18000
        city: Mumbai
        min_experience_years: 5
        work_type: FULL_TIME
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from workmatch.domain.models import JobPosting, JobStatus, WorkerProfile
from workmatch.logging import get_logger

from .database import get_session
from .repositories import JobRepository, SkillRepository, WorkerRepository

logger = get_logger(__name__, component="seed")


class DatasetError(Exception):
    """Raised when a dataset file cannot be read or fails validation."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.message = message
        self.errors = errors or []
        details = "".join(f"\n  - {error}" for error in self.errors)
        super().__init__(f"{message}{details}")


class WorkerRecord(WorkerProfile):
    """Worker entry of a dataset: the profile plus a display name."""

    name: Optional[str] = Field(None, description="Display name")

    def to_profile(self) -> WorkerProfile:
        return WorkerProfile(**self.model_dump(exclude={"name"}))


class JobRecord(JobPosting):
    """Job entry of a dataset: the posting plus title and status."""

    title: Optional[str] = Field(None, description="Display title")
    status: JobStatus = Field(JobStatus.ACTIVE, description="Lifecycle status")

    @field_validator("status", mode="before")
    @classmethod
    def upper_status(cls, v):
        """Accept statuses in any case."""
        return v.strip().upper() if isinstance(v, str) else v

    def to_posting(self) -> JobPosting:
        return JobPosting(**self.model_dump(exclude={"title", "status"}))


class Dataset(BaseModel):
    """Validated dataset contents."""

    workers: List[WorkerRecord] = Field(default_factory=list)
    jobs: List[JobRecord] = Field(default_factory=list)


@dataclass
class SeedSummary:
    """Counts of records written by seed_database().

    skills lists the whole skill catalogue after the seed, sorted.
    """

    workers: int = 0
    jobs: int = 0
    skills: List[str] = field(default_factory=list)

    def as_dict(self) -> Dict[str, object]:
        return {"workers": self.workers, "jobs": self.jobs, "skills": len(self.skills)}


def load_dataset(path: Path) -> Dataset:
    """Read and validate a dataset file.

    Args:
        path: Path to a YAML dataset

    Returns:
        Dataset with validated worker and job records

    Raises:
        DatasetError: If the file is missing, unparsable, or invalid
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise DatasetError(f"Dataset file not found: {path}") from e
    except yaml.YAMLError as e:
        raise DatasetError(f"Failed to parse dataset YAML: {e}") from e

    if not raw:
        raise DatasetError(f"Dataset file is empty: {path}")
    if not isinstance(raw, dict):
        raise DatasetError("Dataset must be a mapping with 'workers' and/or 'jobs' lists")

    try:
        dataset = Dataset.model_validate(raw)
    except ValidationError as e:
        errors = [
            f"{' -> '.join(str(loc) for loc in error['loc'])}: {error['msg']}"
            for error in e.errors()
        ]
        raise DatasetError("Dataset validation failed", errors=errors) from e

    duplicates = _duplicate_ids([worker.id for worker in dataset.workers])
    duplicates += _duplicate_ids([job.id for job in dataset.jobs])
    if duplicates:
        raise DatasetError(
            "Dataset contains duplicate ids",
            errors=[f"Duplicate id: {dup}" for dup in duplicates],
        )

    logger.debug(
        f"Loaded dataset {path}",
        extra={
            "event": "dataset.loaded",
            "worker_count": len(dataset.workers),
            "job_count": len(dataset.jobs),
        },
    )
    return dataset


def seed_database(dataset: Dataset) -> SeedSummary:
    """Upsert every worker and job of a dataset in one transaction.

    Raises:
        PersistenceError: If any write fails (the whole seed is rolled back)
    """
    summary = SeedSummary()

    with get_session() as session:
        workers = WorkerRepository(session)
        jobs = JobRepository(session)

        for record in dataset.workers:
            workers.upsert(record.to_profile(), name=record.name)
            summary.workers += 1

        for record in dataset.jobs:
            jobs.upsert(record.to_posting(), title=record.title, status=record.status)
            summary.jobs += 1

        summary.skills = SkillRepository(session).list_names()

    logger.info(
        f"Seeded {summary.workers} workers and {summary.jobs} jobs",
        extra={"event": "dataset.seeded", **summary.as_dict()},
    )
    return summary


def _duplicate_ids(ids: List[str]) -> List[str]:
    seen = set()
    duplicates = []
    for identifier in ids:
        if identifier in seen and identifier not in duplicates:
            duplicates.append(identifier)
        seen.add(identifier)
    return duplicates
