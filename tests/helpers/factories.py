"""Factories for domain models used across the test suite.

build_job() and build_worker() with no overrides form a pair that satisfies
every factor. Applying NO_MATCH_WORKER to a worker makes it fail every factor
against the default job, so single factors can be switched back on one at a
time.
"""

from workmatch.domain.models import JobPosting, WorkerProfile, WorkType

NO_MATCH_WORKER = {
    "skills": {"Gardening"},
    "hourly_rate": 50000,
    "city": "Delhi",
    "state": "Delhi",
    "experience_years": 0,
    "preferred_work_types": {WorkType.PART_TIME},
    "is_available": False,
}


def build_job(**overrides) -> JobPosting:
    fields = {
        "id": "job-1",
        "required_skills": {"Cleaning", "Cooking"},
        "salary_amount": 15000,
        "city": "Mumbai",
        "state": "Maharashtra",
        "min_experience_years": 2,
        "work_type": WorkType.FULL_TIME,
    }
    fields.update(overrides)
    return JobPosting(**fields)


def build_worker(**overrides) -> WorkerProfile:
    fields = {
        "id": "worker-1",
        "skills": {"Cleaning", "Cooking"},
        "hourly_rate": 15000,
        "city": "Mumbai",
        "state": "Maharashtra",
        "experience_years": 3,
        "preferred_work_types": {WorkType.FULL_TIME},
        "is_available": True,
    }
    fields.update(overrides)
    return WorkerProfile(**fields)
