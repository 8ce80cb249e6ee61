"""Core domain models for workers, job postings, and their enumerations.

This module defines the read-only value types consumed by the matching engine:
- WorkType: employment arrangement offered by a job or preferred by a worker
- JobStatus: lifecycle state of a job posting
- JobPosting: the requirement and compensation fields of a job
- WorkerProfile: the skills, rate, and availability fields of a worker

Both records are frozen so the scorer can never mutate its inputs. Only the
fields that matching reads are carried here; display fields live in the
persistence layer.
"""

from enum import Enum
from typing import Any, FrozenSet, Iterable, Optional

from pydantic import BaseModel, Field, field_validator


class WorkType(str, Enum):
    """Employment arrangements."""

    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    LIVE_IN = "LIVE_IN"
    LIVE_OUT = "LIVE_OUT"
    TEMPORARY = "TEMPORARY"


class JobStatus(str, Enum):
    """Job posting lifecycle states."""

    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    CLOSED = "CLOSED"


def parse_work_type(value: Any) -> Any:
    """Coerce a work type given as text (e.g. "full-time") into a WorkType.

    Non-string values are returned unchanged so pydantic can report them.
    """
    if isinstance(value, str):
        return WorkType(value.strip().upper().replace("-", "_").replace(" ", "_"))
    return value


def _clean_skill_names(values: Optional[Iterable[str]]) -> FrozenSet[str]:
    if values is None:
        return frozenset()
    if isinstance(values, str):
        values = [values]
    cleaned = set()
    for name in values:
        if not isinstance(name, str):
            raise ValueError(f"Skill names must be strings, got {type(name).__name__}")
        stripped = name.strip()
        if stripped:
            cleaned.add(stripped)
    return frozenset(cleaned)


def _clean_optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _clean_identifier(value: str) -> str:
    if not value or not value.strip():
        raise ValueError("Identifier cannot be empty or whitespace-only")
    return value.strip()


class JobPosting(BaseModel):
    """Requirements and compensation terms of a job listing."""

    id: str = Field(..., description="Job identifier")
    required_skills: FrozenSet[str] = Field(
        default_factory=frozenset, description="Skill names the job requires"
    )
    salary_amount: float = Field(0.0, ge=0, description="Offered salary amount")
    city: Optional[str] = Field(None, description="Job city")
    state: Optional[str] = Field(None, description="Job state or region")
    min_experience_years: Optional[int] = Field(
        None, ge=0, description="Minimum years of experience required"
    )
    work_type: WorkType = Field(WorkType.FULL_TIME, description="Employment arrangement")

    model_config = {"frozen": True}

    @field_validator("id", mode="before")
    @classmethod
    def strip_id(cls, v: Any) -> Any:
        """Strip whitespace from the identifier."""
        if isinstance(v, int):
            v = str(v)
        return _clean_identifier(v) if isinstance(v, str) else v

    @field_validator("required_skills", mode="before")
    @classmethod
    def clean_skills(cls, v: Any) -> FrozenSet[str]:
        """Strip skill names and drop blanks."""
        return _clean_skill_names(v)

    @field_validator("city", "state", mode="before")
    @classmethod
    def strip_location(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank location fields as missing."""
        return _clean_optional_text(v) if isinstance(v, str) or v is None else v

    @field_validator("work_type", mode="before")
    @classmethod
    def coerce_work_type(cls, v: Any) -> Any:
        """Accept work types in any case, with dashes or spaces."""
        return parse_work_type(v)


class WorkerProfile(BaseModel):
    """Skills, rate, location, and availability of a worker."""

    id: str = Field(..., description="Worker identifier")
    skills: FrozenSet[str] = Field(default_factory=frozenset, description="Skill names")
    hourly_rate: float = Field(0.0, ge=0, description="Expected rate")
    city: Optional[str] = Field(None, description="Worker city")
    state: Optional[str] = Field(None, description="Worker state or region")
    experience_years: int = Field(0, ge=0, description="Years of experience")
    preferred_work_types: FrozenSet[WorkType] = Field(
        default_factory=frozenset, description="Work types the worker accepts"
    )
    is_available: bool = Field(True, description="Whether the worker is open to work")

    model_config = {"frozen": True}

    @field_validator("id", mode="before")
    @classmethod
    def strip_id(cls, v: Any) -> Any:
        """Strip whitespace from the identifier."""
        if isinstance(v, int):
            v = str(v)
        return _clean_identifier(v) if isinstance(v, str) else v

    @field_validator("skills", mode="before")
    @classmethod
    def clean_skills(cls, v: Any) -> FrozenSet[str]:
        """Strip skill names and drop blanks."""
        return _clean_skill_names(v)

    @field_validator("city", "state", mode="before")
    @classmethod
    def strip_location(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank location fields as missing."""
        return _clean_optional_text(v) if isinstance(v, str) or v is None else v

    @field_validator("preferred_work_types", mode="before")
    @classmethod
    def coerce_work_types(cls, v: Any) -> Any:
        """Accept a single work type or any iterable of work types."""
        if v is None:
            return frozenset()
        if isinstance(v, (str, WorkType)):
            v = [v]
        return frozenset(parse_work_type(item) for item in v)
