"""Rule-based compatibility scoring between a job posting and a worker.

The score is an additive sum of six weighted factors evaluated in a fixed
order. Each factor that contributes appends one reason, so the reasons list
always follows the order skills, salary, location, experience, work type,
availability.

    Factor        Full   Partial
    skills          40   proportional to required skills covered
    salary          25   15
    location        20   10 (state only)
    experience      10    5 (within 80% of the minimum)
    work type        5    -
    availability     5    -

The function is pure: it reads two frozen value objects and returns a new
MatchResult.
"""

import math
from typing import Optional

from workmatch.domain.models import JobPosting, WorkerProfile

from .models import MatchResult

SKILLS_WEIGHT = 40
SALARY_MATCH_POINTS = 25
SALARY_ACCEPTABLE_POINTS = 15
CITY_POINTS = 20
STATE_POINTS = 10
EXPERIENCE_MET_POINTS = 10
EXPERIENCE_CLOSE_POINTS = 5
WORK_TYPE_POINTS = 5
AVAILABILITY_POINTS = 5

# Worker accepts up to 50% above their rate as a full salary match
SALARY_UPPER_FACTOR = 1.5
# Salary may fall 20% short of the rate and still be acceptable
SALARY_TOLERANCE_FACTOR = 1.2
EXPERIENCE_CLOSE_RATIO = 0.8

MIN_SCORE = 0
MAX_SCORE = 100


def score_match(
    job: JobPosting, worker: WorkerProfile, subject_id: Optional[str] = None
) -> MatchResult:
    """Score how well a worker fits a job.

    Args:
        job: Job posting supplying requirements and compensation
        worker: Worker profile supplying skills, rate, and availability
        subject_id: Identifier to report on the result (defaults to worker.id)

    Returns:
        MatchResult with the rounded, clamped score and ordered reasons
    """
    total = 0.0
    reasons = []

    # Skills
    if job.required_skills:
        common = job.required_skills & worker.skills
        total += SKILLS_WEIGHT * len(common) / len(job.required_skills)
        if common:
            reasons.append(f"Has {len(common)} required skills")

    # Salary
    lower_bound = worker.hourly_rate
    upper_bound = worker.hourly_rate * SALARY_UPPER_FACTOR
    if lower_bound <= job.salary_amount <= upper_bound:
        total += SALARY_MATCH_POINTS
        reasons.append("Salary expectations match")
    elif lower_bound <= job.salary_amount * SALARY_TOLERANCE_FACTOR:
        total += SALARY_ACCEPTABLE_POINTS
        reasons.append("Salary within acceptable range")

    # Location
    if _same_place(job.city, worker.city):
        total += CITY_POINTS
        reasons.append("Same city location")
    elif _same_place(job.state, worker.state):
        total += STATE_POINTS
        reasons.append("Same state location")

    # Experience
    minimum = job.min_experience_years
    if minimum is not None:
        if worker.experience_years >= minimum:
            total += EXPERIENCE_MET_POINTS
            reasons.append("Meets experience requirements")
        elif worker.experience_years >= EXPERIENCE_CLOSE_RATIO * minimum:
            total += EXPERIENCE_CLOSE_POINTS
            reasons.append("Close to experience requirements")

    # Work type
    if job.work_type in worker.preferred_work_types:
        total += WORK_TYPE_POINTS
        reasons.append("Preferred work type matches")

    # Availability
    if worker.is_available:
        total += AVAILABILITY_POINTS
        reasons.append("Currently available")

    return MatchResult(
        subject_id=subject_id if subject_id is not None else worker.id,
        score=finalize_score(total),
        reasons=reasons,
    )


def finalize_score(total: float) -> int:
    """Round half up to an integer and clamp into [0, 100]."""
    rounded = int(math.floor(total + 0.5))
    return max(MIN_SCORE, min(MAX_SCORE, rounded))


def _same_place(left: Optional[str], right: Optional[str]) -> bool:
    if not left or not right:
        return False
    return left.casefold() == right.casefold()
