"""Candidate ranking built on the match scorer.

This module implements the ranking step that:
1. Scores every candidate against one fixed job or worker
2. Keeps candidates scoring strictly above the threshold
3. Orders them by score (stable, so input order breaks ties)
4. Truncates to the result cap
"""

import logging
from typing import Iterable, List, Optional

from workmatch.domain.models import JobPosting, WorkerProfile

from .models import MatchResult, MatchSubject
from .scoring import score_match

logger = logging.getLogger(__name__)

MATCH_SCORE_THRESHOLD = 50
MAX_MATCH_RESULTS = 10


class CandidateRanker:
    """Ranks candidates of the opposite type against a fixed job or worker.

    Responsibilities:
    - Dispatch on the fixed side (job ranks workers, worker ranks jobs)
    - Apply the score threshold (strictly greater than)
    - Stable descending sort and truncation
    """

    def __init__(
        self,
        min_score: int = MATCH_SCORE_THRESHOLD,
        max_results: int = MAX_MATCH_RESULTS,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize CandidateRanker.

        Args:
            min_score: Results must score strictly above this value
            max_results: Maximum number of results returned
            logger_instance: Optional logger instance (defaults to module logger)
        """
        if max_results < 1:
            raise ValueError(f"max_results must be at least 1, got {max_results}")
        self.min_score = min_score
        self.max_results = max_results
        self.logger = logger_instance or logger

    def rank(self, fixed: MatchSubject, candidates: Iterable[MatchSubject]) -> List[MatchResult]:
        """Rank candidates against a fixed job or worker.

        Args:
            fixed: JobPosting (candidates are workers) or WorkerProfile
                (candidates are jobs)
            candidates: Already-materialized candidates of the opposite type

        Returns:
            Up to max_results MatchResults with non-increasing scores

        Raises:
            TypeError: If fixed or a candidate has the wrong type
        """
        if isinstance(fixed, JobPosting):
            return self.rank_workers_for_job(fixed, candidates)
        if isinstance(fixed, WorkerProfile):
            return self.rank_jobs_for_worker(fixed, candidates)
        raise TypeError(
            f"Cannot rank against {type(fixed).__name__}; expected JobPosting or WorkerProfile"
        )

    def rank_workers_for_job(
        self, job: JobPosting, workers: Iterable[WorkerProfile]
    ) -> List[MatchResult]:
        """Rank workers for a job; results carry worker ids."""
        results = []
        for worker in workers:
            if not isinstance(worker, WorkerProfile):
                raise TypeError(
                    f"Expected WorkerProfile candidates for a job, got {type(worker).__name__}"
                )
            results.append(score_match(job, worker, subject_id=worker.id))
        return self._select(results, fixed_id=job.id, fixed_type="job")

    def rank_jobs_for_worker(
        self, worker: WorkerProfile, jobs: Iterable[JobPosting]
    ) -> List[MatchResult]:
        """Rank jobs for a worker; results carry job ids."""
        results = []
        for job in jobs:
            if not isinstance(job, JobPosting):
                raise TypeError(
                    f"Expected JobPosting candidates for a worker, got {type(job).__name__}"
                )
            results.append(score_match(job, worker, subject_id=job.id))
        return self._select(results, fixed_id=worker.id, fixed_type="worker")

    def _select(
        self, results: List[MatchResult], fixed_id: str, fixed_type: str
    ) -> List[MatchResult]:
        """Filter by threshold, stable-sort descending, and truncate."""
        retained = [result for result in results if result.score > self.min_score]
        # sorted() is stable, so equal scores keep candidate input order
        ranked = sorted(retained, key=lambda result: result.score, reverse=True)
        top = ranked[: self.max_results]

        self.logger.debug(
            f"Ranked {len(results)} candidates for {fixed_type} {fixed_id}",
            extra={
                "event": "matching.rank.completed",
                "target_type": fixed_type,
                "target_id": fixed_id,
                "scored": len(results),
                "above_threshold": len(retained),
                "returned": len(top),
            },
        )
        return top
