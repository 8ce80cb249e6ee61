"""Non-fatal configuration checks."""

import warnings
from typing import Any, Dict, List

HIGH_THRESHOLD = 90
LARGE_RESULT_CAP = 50


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """Return warnings for settings that are valid but probably unintended.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    messages = []

    matching = config_dict.get("matching") or {}
    if not isinstance(matching, dict):
        return messages

    min_score = matching.get("min_score")
    if isinstance(min_score, int) and HIGH_THRESHOLD <= min_score < 100:
        messages.append(
            f"matching.min_score is {min_score}; only near-perfect candidates will be returned"
        )

    max_results = matching.get("max_results")
    if isinstance(max_results, int) and max_results > LARGE_RESULT_CAP:
        messages.append(
            f"matching.max_results is {max_results}; responses may become large"
        )

    if matching.get("include_unavailable_workers") is True:
        messages.append(
            "matching.include_unavailable_workers is enabled; workers who are not "
            "looking for work will appear in job matches"
        )

    return messages


def emit_warnings(messages: List[str]) -> None:
    """Emit each message as a UserWarning."""
    for message in messages:
        warnings.warn(message, UserWarning, stacklevel=2)
