"""Failure classification for external calls."""

from careerlog.resilience.errors import (
    ErrorClass,
    classify_error,
    describe_error,
)

__all__ = ["ErrorClass", "classify_error", "describe_error"]
