"""Data models for the matching engine.

This module defines the scored outcome of comparing one job with one worker,
and the report the matching service returns for a ranking request.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from workmatch.domain.models import JobPosting, WorkerProfile

MatchSubject = Union[JobPosting, WorkerProfile]


@dataclass
class MatchResult:
    """Result of scoring one job posting against one worker profile.

    Attributes:
        subject_id: Identifier of the candidate side (worker or job)
        score: Integer compatibility score in [0, 100]
        reasons: Short explanations of the contributing factors, in the
            order skills, salary, location, experience, work type, availability
    """

    subject_id: str
    score: int
    reasons: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON record shape callers expect.

        Returns:
            Dict with keys subjectId, score, reasons (in that order)
        """
        return {
            "subjectId": self.subject_id,
            "score": self.score,
            "reasons": list(self.reasons),
        }


@dataclass
class MatchReport:
    """Outcome of a ranking request handled by the matching service.

    Attributes:
        target_type: "job" when workers were ranked for a job, "worker" otherwise
        target_id: Identifier of the fixed side
        candidates_considered: Size of the candidate pool that was scored
        results: Ranked match results (highest score first)
        subjects: Candidate domain models keyed by subject id, for the results only
        duration_seconds: Wall time spent fetching and ranking
        target_label: Stored job title or worker name of the fixed side
        labels: Stored titles or names of the returned candidates, by subject id
    """

    target_type: str
    target_id: str
    candidates_considered: int = 0
    results: List[MatchResult] = field(default_factory=list)
    subjects: Dict[str, MatchSubject] = field(default_factory=dict)
    duration_seconds: float = 0.0
    target_label: Optional[str] = None
    labels: Dict[str, str] = field(default_factory=dict)

    @property
    def match_count(self) -> int:
        """Number of ranked results."""
        return len(self.results)

    @property
    def top_score(self) -> int:
        """Best score in the report, or 0 when nothing matched."""
        return self.results[0].score if self.results else 0
