"""Helpers for presenting match reports to callers.

build_match_payload() produces the JSON document the CLI prints;
format_match_report() renders the same report as plain text.
"""

from typing import Any, Dict, List

from workmatch.domain.models import JobPosting

from .models import MatchReport, MatchSubject


def subject_details(subject: MatchSubject) -> Dict[str, Any]:
    """Describe a candidate with the fields its score was computed from.

    Skill and work type collections are emitted as sorted lists.
    """
    details = subject.model_dump(mode="json")
    for key, value in details.items():
        if isinstance(value, list):
            details[key] = sorted(value)
    details["type"] = "job" if isinstance(subject, JobPosting) else "worker"
    return details


def build_match_payload(report: MatchReport, include_details: bool = False) -> Dict[str, Any]:
    """Build a JSON-serializable payload from a match report.

    Args:
        report: MatchReport from MatchingService
        include_details: Attach each candidate's profile under "subject"

    Returns:
        Dict with keys:
        - target: {"type": "job"|"worker", "id": ...}
        - candidates_considered: size of the scored pool
        - matches: list of {"subjectId", "score", "reasons"[, "subject"]}
    """
    matches: List[Dict[str, Any]] = []
    for result in report.results:
        entry = result.to_dict()
        if include_details and result.subject_id in report.subjects:
            entry["subject"] = subject_details(report.subjects[result.subject_id])
        matches.append(entry)

    return {
        "target": {"type": report.target_type, "id": report.target_id},
        "candidates_considered": report.candidates_considered,
        "matches": matches,
    }


def format_match_report(report: MatchReport) -> str:
    """Render a match report as human-readable text."""
    candidate_kind = "workers" if report.target_type == "job" else "jobs"
    target = f"{report.target_type} {report.target_id}"
    if report.target_label:
        target += f' "{report.target_label}"'
    lines = [
        f"Top {candidate_kind} for {target} "
        f"({report.match_count} of {report.candidates_considered} candidates)"
    ]

    if not report.results:
        lines.append("  No candidates scored above the match threshold.")
        return "\n".join(lines)

    for position, result in enumerate(report.results, 1):
        label = report.labels.get(result.subject_id)
        heading = f"{result.subject_id} ({label})" if label else result.subject_id
        lines.append(f"  {position:>2}. {heading}  score={result.score}")
        subject = report.subjects.get(result.subject_id)
        if subject is not None and subject.city:
            lines.append(f"      location: {subject.city}")
        for reason in result.reasons:
            lines.append(f"      - {reason}")

    return "\n".join(lines)
