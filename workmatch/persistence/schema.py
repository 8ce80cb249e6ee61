"""Database schema definition and ORM models.

This module defines the SQLAlchemy ORM models for skills, workers, and jobs,
and converts rows into the frozen domain models the matching engine reads.
Worker work-type preferences are stored as a JSON array string and decoded
here, once, into a set of WorkType members.
"""

import json
import logging
from typing import FrozenSet, Iterable, Optional

from sqlalchemy import (
    Boolean,
    Column,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    inspect,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship

from workmatch.domain.models import JobPosting, JobStatus, WorkerProfile, WorkType

from .exceptions import DataIntegrityError

logger = logging.getLogger(__name__)

Base = declarative_base()


worker_skills = Table(
    "worker_skills",
    Base.metadata,
    Column("worker_id", String(64), ForeignKey("workers.id", ondelete="CASCADE"), primary_key=True),
    Column("skill_id", Integer, ForeignKey("skills.id", ondelete="CASCADE"), primary_key=True),
)

job_skills = Table(
    "job_skills",
    Base.metadata,
    Column("job_id", String(64), ForeignKey("jobs.id", ondelete="CASCADE"), primary_key=True),
    Column("skill_id", Integer, ForeignKey("skills.id", ondelete="CASCADE"), primary_key=True),
)


class SkillModel(Base):
    """ORM model for the skills catalogue."""

    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)


class WorkerModel(Base):
    """ORM model for workers table."""

    __tablename__ = "workers"

    id = Column(String(64), primary_key=True, nullable=False)
    name = Column(String(255), nullable=True)

    hourly_rate = Column(Float, nullable=False, default=0.0)
    city = Column(String(255), nullable=True)
    state = Column(String(255), nullable=True)
    experience_years = Column(Integer, nullable=False, default=0)
    # JSON array of WorkType values, e.g. '["FULL_TIME", "LIVE_OUT"]'
    work_types = Column(Text, nullable=False, default="[]")
    is_available = Column(Boolean, nullable=False, default=True)

    skills = relationship("SkillModel", secondary=worker_skills, lazy="selectin")

    __table_args__ = (Index("idx_workers_available", "is_available"),)

    def to_domain(self) -> WorkerProfile:
        """Convert ORM model to domain model.

        Raises:
            DataIntegrityError: If work_types cannot be decoded
        """
        return WorkerProfile(
            id=self.id,
            skills=frozenset(skill.name for skill in self.skills),
            hourly_rate=self.hourly_rate,
            city=self.city,
            state=self.state,
            experience_years=self.experience_years,
            preferred_work_types=decode_work_types(self.work_types, owner=self.id),
            is_available=self.is_available,
        )

    def apply(self, worker: WorkerProfile, name: Optional[str] = None) -> None:
        """Copy scalar fields from a domain model onto this row (skills excluded)."""
        if name is not None:
            self.name = name
        self.hourly_rate = worker.hourly_rate
        self.city = worker.city
        self.state = worker.state
        self.experience_years = worker.experience_years
        self.work_types = encode_work_types(worker.preferred_work_types)
        self.is_available = worker.is_available


class JobModel(Base):
    """ORM model for jobs table."""

    __tablename__ = "jobs"

    id = Column(String(64), primary_key=True, nullable=False)
    title = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=JobStatus.ACTIVE.value)

    salary_amount = Column(Float, nullable=False, default=0.0)
    city = Column(String(255), nullable=True)
    state = Column(String(255), nullable=True)
    min_experience_years = Column(Integer, nullable=True)
    work_type = Column(String(20), nullable=False, default=WorkType.FULL_TIME.value)

    skills = relationship("SkillModel", secondary=job_skills, lazy="selectin")

    __table_args__ = (Index("idx_jobs_status", "status"),)

    def to_domain(self) -> JobPosting:
        """Convert ORM model to domain model."""
        return JobPosting(
            id=self.id,
            required_skills=frozenset(skill.name for skill in self.skills),
            salary_amount=self.salary_amount,
            city=self.city,
            state=self.state,
            min_experience_years=self.min_experience_years,
            work_type=self.work_type,
        )

    def apply(
        self,
        job: JobPosting,
        title: Optional[str] = None,
        status: Optional[JobStatus] = None,
    ) -> None:
        """Copy scalar fields from a domain model onto this row (skills excluded)."""
        if title is not None:
            self.title = title
        if status is not None:
            self.status = JobStatus(status).value
        self.salary_amount = job.salary_amount
        self.city = job.city
        self.state = job.state
        self.min_experience_years = job.min_experience_years
        self.work_type = job.work_type.value


def encode_work_types(work_types: Iterable[WorkType]) -> str:
    """Serialize work types as a sorted JSON array of enum values."""
    return json.dumps(sorted(WorkType(work_type).value for work_type in work_types))


def decode_work_types(raw: Optional[str], owner: str = "") -> FrozenSet[WorkType]:
    """Parse the stored JSON array into a set of WorkType members.

    Args:
        raw: Column value; None or "" means no preference
        owner: Worker id, used in error messages

    Raises:
        DataIntegrityError: If the value is not a JSON array of known work types
    """
    if raw is None or raw.strip() == "":
        return frozenset()

    try:
        values = json.loads(raw)
    except json.JSONDecodeError as e:
        raise DataIntegrityError(f"Invalid work_types JSON for worker {owner}: {raw!r}") from e

    if not isinstance(values, list):
        raise DataIntegrityError(
            f"work_types for worker {owner} must be a JSON array, got {type(values).__name__}"
        )

    try:
        return frozenset(WorkType(str(value).upper()) for value in values)
    except ValueError as e:
        raise DataIntegrityError(f"Unknown work type for worker {owner}: {e}") from e


def create_schema(engine: Engine) -> None:
    """Create all tables and indexes if they don't exist (idempotent).

    Args:
        engine: SQLAlchemy engine instance
    """
    logger.info("Creating database schema if not exists")

    try:
        Base.metadata.create_all(engine, checkfirst=True)
        tables = inspect(engine).get_table_names()
        logger.info(f"Database schema ready. Tables: {', '.join(tables)}")
    except Exception as e:
        logger.error(f"Failed to create database schema: {e}", exc_info=True)
        raise
