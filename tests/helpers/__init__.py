"""Test helpers."""

from .factories import NO_MATCH_WORKER, build_job, build_worker

__all__ = ["NO_MATCH_WORKER", "build_job", "build_worker"]
