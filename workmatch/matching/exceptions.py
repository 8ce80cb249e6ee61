"""Errors raised around (never inside) scoring and ranking."""


class MatchingError(Exception):
    """Base exception for matching service errors."""

    pass


class InvalidMatchRequestError(MatchingError):
    """Raised when a request names neither or both of a job and a worker."""

    pass


class MatchTargetNotFoundError(MatchingError):
    """Raised when the fixed-side job or worker does not exist.

    Attributes:
        target_type: "job" or "worker"
        target_id: The identifier that was looked up
    """

    def __init__(self, target_type: str, target_id: str):
        self.target_type = target_type
        self.target_id = target_id
        super().__init__(f"{target_type.capitalize()} not found: {target_id}")
