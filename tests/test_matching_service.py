"""Unit tests for MatchingService against a seeded database."""

import pytest

from workmatch.domain.models import JobStatus, WorkType
from workmatch.matching import (
    CandidateRanker,
    InvalidMatchRequestError,
    MatchingService,
    MatchTargetNotFoundError,
)
from workmatch.persistence import JobRepository, WorkerRepository, get_session

from tests.helpers import NO_MATCH_WORKER, build_job, build_worker


@pytest.fixture
def seeded(test_database):
    """Three workers and three jobs with known pairwise scores.

    Against job-1: w-best scores 100, w-good 70, w-off 0, and w-away
    (unavailable) would score 95.
    """
    with get_session() as session:
        workers = WorkerRepository(session)
        workers.upsert(build_worker(id="w-best"))
        workers.upsert(
            build_worker(
                id="w-good",
                skills={"Cleaning"},
                city="Pune",
                preferred_work_types={WorkType.PART_TIME},
            )
        )
        workers.upsert(build_worker(**dict(NO_MATCH_WORKER, id="w-off")))
        workers.upsert(
            build_worker(
                id="w-away",
                is_available=False,
                preferred_work_types={WorkType.PART_TIME},
            )
        )

        jobs = JobRepository(session)
        jobs.upsert(build_job(id="job-1"), title="Cook in Mumbai")
        jobs.upsert(build_job(id="job-2", city="Pune", state="Maharashtra"))
        jobs.upsert(build_job(id="job-closed"), status=JobStatus.CLOSED)
    return test_database


class TestMatchWorkersForJob:
    def test_ranks_available_workers(self, seeded):
        report = MatchingService().match_workers_for_job("job-1")

        assert report.target_type == "job"
        assert report.target_id == "job-1"
        assert report.candidates_considered == 3
        assert [(r.subject_id, r.score) for r in report.results] == [
            ("w-best", 100),
            ("w-good", 70),
        ]

    def test_subjects_cover_results_only(self, seeded):
        report = MatchingService().match_workers_for_job("job-1")

        assert set(report.subjects) == {"w-best", "w-good"}
        assert report.subjects["w-best"].city == "Mumbai"

    def test_labels_come_from_stored_titles_and_names(self, seeded):
        with get_session() as session:
            WorkerRepository(session).upsert(build_worker(id="w-best"), name="Asha Patil")

        report = MatchingService().match_workers_for_job("job-1")

        assert report.target_label == "Cook in Mumbai"
        assert report.labels == {"w-best": "Asha Patil"}

    def test_can_include_unavailable_workers(self, seeded):
        service = MatchingService(include_unavailable_workers=True)

        report = service.match_workers_for_job("job-1")

        assert report.candidates_considered == 4
        assert [r.subject_id for r in report.results] == ["w-best", "w-away", "w-good"]
        assert report.results[1].score == 95
        assert "Currently available" not in report.results[1].reasons

    def test_closed_job_can_still_be_matched(self, seeded):
        report = MatchingService().match_workers_for_job("job-closed")
        assert report.match_count == 2

    def test_unknown_job(self, seeded):
        with pytest.raises(MatchTargetNotFoundError) as exc_info:
            MatchingService().match_workers_for_job("job-404")

        assert exc_info.value.target_type == "job"
        assert exc_info.value.target_id == "job-404"
        assert str(exc_info.value) == "Job not found: job-404"

    def test_uses_ranker_limits(self, seeded):
        service = MatchingService(ranker=CandidateRanker(min_score=70, max_results=1))

        report = service.match_workers_for_job("job-1")

        assert [r.subject_id for r in report.results] == ["w-best"]


class TestMatchJobsForWorker:
    def test_ranks_active_jobs_only(self, seeded):
        report = MatchingService().match_jobs_for_worker("w-good")

        assert report.target_type == "worker"
        assert report.candidates_considered == 2
        # job-2 is in Pune (city match), job-1 only shares the state
        assert [(r.subject_id, r.score) for r in report.results] == [
            ("job-2", 80),
            ("job-1", 70),
        ]

    def test_job_titles_label_results(self, seeded):
        report = MatchingService().match_jobs_for_worker("w-good")

        assert report.target_label is None
        assert report.labels == {"job-1": "Cook in Mumbai"}

    def test_unknown_worker(self, seeded):
        with pytest.raises(MatchTargetNotFoundError, match="Worker not found: nobody"):
            MatchingService().match_jobs_for_worker("nobody")

    def test_no_matches(self, seeded):
        report = MatchingService().match_jobs_for_worker("w-off")

        assert report.results == []
        assert report.top_score == 0


class TestMatchDispatch:
    def test_job_id(self, seeded):
        assert MatchingService().match(job_id="job-1").target_type == "job"

    def test_worker_id(self, seeded):
        assert MatchingService().match(worker_id="w-best").target_type == "worker"

    def test_requires_one_id(self, seeded):
        with pytest.raises(InvalidMatchRequestError):
            MatchingService().match()

    def test_rejects_both_ids(self, seeded):
        with pytest.raises(InvalidMatchRequestError):
            MatchingService().match(job_id="job-1", worker_id="w-best")
