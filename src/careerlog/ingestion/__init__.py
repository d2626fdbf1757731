"""Commit extraction: git log, diff stats and unified diffs."""

from careerlog.ingestion.git_source import (
    GitCommandError,
    GitSource,
    parse_log_output,
    parse_numstat,
)
from careerlog.ingestion.schemas import CommitRecord, DiffStat, LogQuery

__all__ = [
    "CommitRecord",
    "DiffStat",
    "GitCommandError",
    "GitSource",
    "LogQuery",
    "parse_log_output",
    "parse_numstat",
]
