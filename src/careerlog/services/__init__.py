"""Pipeline orchestration and its output models."""

from careerlog.services.events import ProgressCallback, StageEvent
from careerlog.services.pipeline import (
    NoCommitsError,
    build_entry,
    generate_career_log,
)
from careerlog.services.schemas import CareerLog, CareerLogEntry

__all__ = [
    "CareerLog",
    "CareerLogEntry",
    "NoCommitsError",
    "ProgressCallback",
    "StageEvent",
    "build_entry",
    "generate_career_log",
]
