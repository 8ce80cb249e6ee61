"""Rule-based matching between job postings and worker profiles.

This module provides:
- score_match: Pure weighted scoring of one job against one worker
- CandidateRanker: Threshold, stable sort, and cap over a candidate pool
- MatchingService: Storage-backed ranking requests by job or worker id
- MatchResult / MatchReport: Result structures
- Payload and text formatting helpers
"""

from .engine import MATCH_SCORE_THRESHOLD, MAX_MATCH_RESULTS, CandidateRanker
from .exceptions import InvalidMatchRequestError, MatchingError, MatchTargetNotFoundError
from .models import MatchReport, MatchResult
from .scoring import score_match
from .service import MatchingService
from .utils import build_match_payload, format_match_report, subject_details

__all__ = [
    "score_match",
    "CandidateRanker",
    "MatchingService",
    "MatchResult",
    "MatchReport",
    "MATCH_SCORE_THRESHOLD",
    "MAX_MATCH_RESULTS",
    "MatchingError",
    "InvalidMatchRequestError",
    "MatchTargetNotFoundError",
    "build_match_payload",
    "format_match_report",
    "subject_details",
]
