"""Matching service: resolve the fixed side, fetch candidates, rank.

The service is the only part of matching that touches storage. It reads the
fixed job or worker and its candidate pool inside one session, closes the
session, and only then hands the materialized domain models to the ranker.
Display titles and names for the ranked results are read afterwards in a
second short session.

Candidate pools:
- ranking workers for a job uses available workers (or all workers when
  include_unavailable_workers is set)
- ranking jobs for a worker uses ACTIVE jobs
"""

import time
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from workmatch.domain.models import JobPosting, WorkerProfile
from workmatch.logging import get_logger
from workmatch.logging.context import log_context
from workmatch.persistence.database import get_session
from workmatch.persistence.repositories import JobRepository, WorkerRepository

from .engine import CandidateRanker
from .exceptions import InvalidMatchRequestError, MatchTargetNotFoundError
from .models import MatchReport, MatchSubject

logger = get_logger(__name__, component="matching")


class MatchingService:
    """Serves ranking requests against the persisted workers and jobs."""

    def __init__(
        self,
        ranker: Optional[CandidateRanker] = None,
        include_unavailable_workers: bool = False,
    ):
        """Initialize MatchingService.

        Args:
            ranker: Ranker to apply (defaults to the standard threshold and cap)
            include_unavailable_workers: Rank every worker for a job, not
                just available ones
        """
        self.ranker = ranker or CandidateRanker()
        self.include_unavailable_workers = include_unavailable_workers

    def match(self, job_id: Optional[str] = None, worker_id: Optional[str] = None) -> MatchReport:
        """Rank workers for a job, or jobs for a worker.

        Exactly one of job_id or worker_id must be given.

        Raises:
            InvalidMatchRequestError: If neither or both ids are given
            MatchTargetNotFoundError: If the named job or worker does not exist
            PersistenceError: If the database cannot be read
        """
        if job_id and worker_id:
            raise InvalidMatchRequestError("Provide either a job id or a worker id, not both")
        if job_id:
            return self.match_workers_for_job(job_id)
        if worker_id:
            return self.match_jobs_for_worker(worker_id)
        raise InvalidMatchRequestError("A job id or a worker id is required")

    def match_workers_for_job(self, job_id: str) -> MatchReport:
        """Rank candidate workers for one job."""

        def fetch(session) -> Tuple[Optional[JobPosting], List[WorkerProfile]]:
            job = JobRepository(session).get_by_id(job_id)
            if job is None:
                return None, []
            workers = WorkerRepository(session)
            pool = workers.list_all() if self.include_unavailable_workers else workers.list_available()
            return job, pool

        return self._run("job", job_id, fetch)

    def match_jobs_for_worker(self, worker_id: str) -> MatchReport:
        """Rank active jobs for one worker."""

        def fetch(session) -> Tuple[Optional[WorkerProfile], List[JobPosting]]:
            worker = WorkerRepository(session).get_by_id(worker_id)
            if worker is None:
                return None, []
            return worker, JobRepository(session).list_active()

        return self._run("worker", worker_id, fetch)

    def _run(
        self,
        target_type: str,
        target_id: str,
        fetch: Callable[..., Tuple[Optional[MatchSubject], Sequence[MatchSubject]]],
    ) -> MatchReport:
        started = time.monotonic()

        with log_context(target_type=target_type, target_id=target_id):
            with get_session() as session:
                fixed, candidates = fetch(session)

            if fixed is None:
                logger.info(
                    f"{target_type.capitalize()} not found: {target_id}",
                    extra={"event": "matching.target.not_found"},
                )
                raise MatchTargetNotFoundError(target_type, target_id)

            results = self.ranker.rank(fixed, candidates)
            by_id: Dict[str, MatchSubject] = {candidate.id: candidate for candidate in candidates}
            target_label, labels = self._lookup_labels(
                target_type, target_id, [result.subject_id for result in results]
            )

            report = MatchReport(
                target_type=target_type,
                target_id=target_id,
                candidates_considered=len(candidates),
                results=results,
                subjects={result.subject_id: by_id[result.subject_id] for result in results},
                duration_seconds=round(time.monotonic() - started, 4),
                target_label=target_label,
                labels=labels,
            )

            logger.info(
                f"Matched {report.match_count} of {report.candidates_considered} candidates",
                extra={
                    "event": "matching.request.completed",
                    "candidates_considered": report.candidates_considered,
                    "match_count": report.match_count,
                    "top_score": report.top_score,
                    "duration_seconds": report.duration_seconds,
                },
            )
            return report

    @staticmethod
    def _lookup_labels(
        target_type: str, target_id: str, subject_ids: List[str]
    ) -> Tuple[Optional[str], Dict[str, str]]:
        """Fetch the stored title or name of the target and of each ranked candidate."""
        with get_session() as session:
            job_titles = JobRepository(session).get_title
            worker_names = WorkerRepository(session).get_name
            if target_type == "job":
                target_lookup, subject_lookup = job_titles, worker_names
            else:
                target_lookup, subject_lookup = worker_names, job_titles

            target_label = target_lookup(target_id)
            labels = {}
            for subject_id in subject_ids:
                label = subject_lookup(subject_id)
                if label:
                    labels[subject_id] = label
        return target_label, labels
