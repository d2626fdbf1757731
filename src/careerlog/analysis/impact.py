"""Classify a commit's impact from its diff stat and diff text.

``classify_impact`` is a pure function of the commit metadata and the
diff text; ``assess_impact`` fetches the diff first and treats a
failed retrieval (root commit, git error) as "no diff".
"""

from __future__ import annotations

import logging
import re
from typing import Protocol

from careerlog.analysis.schemas import ChangeMetrics, ImpactAssessment
from careerlog.constants import (
    BUGFIX_ADDED_RATIO,
    BUGFIX_MIN_REMOVED,
    FEATURE_MAX_REMOVED,
    FEATURE_MIN_ADDED,
    FEW_FILES_MAX,
    LARGE_CHANGE_LINES,
    MODERATE_CHANGE_LINES,
    MULTIPLE_FILES_MAX,
    MULTIPLE_FILES_MIN,
    REFACTOR_MIN_LINES,
    STANDARD_COMMIT_SIGNAL,
    ImpactLevel,
)
from careerlog.ingestion.schemas import CommitRecord
from careerlog.patterns import (
    CRITICAL_FILE_PATTERNS,
    CRITICAL_KEYWORDS,
    FILE_TYPE_PATTERNS,
    PERFORMANCE_KEYWORDS,
)

logger = logging.getLogger(__name__)

_ADDED_LINE_RE = re.compile(r"^\+", re.MULTILINE)
_REMOVED_LINE_RE = re.compile(r"^-", re.MULTILINE)

PERFORMANCE_SIGNAL = "Performance-related changes detected"


class DiffProvider(Protocol):
    async def get_diff_or_none(self, commit_hash: str) -> str | None: ...


def count_diff_lines(diff_text: str) -> tuple[int, int]:
    """Return (added, removed) line-marker counts of a unified diff."""
    return (
        len(_ADDED_LINE_RE.findall(diff_text)),
        len(_REMOVED_LINE_RE.findall(diff_text)),
    )


def is_critical_path(path: str) -> bool:
    return any(p.search(path) for p in CRITICAL_FILE_PATTERNS)


def detect_file_type(path: str) -> str | None:
    """First category in the file-type table that matches *path*."""
    for category, patterns in FILE_TYPE_PATTERNS:
        if any(p.search(path) for p in patterns):
            return category
    return None


def _diff_signals(diff_text: str) -> list[str]:
    signals: list[str] = []
    lowered = diff_text.lower()

    for keyword in CRITICAL_KEYWORDS:
        if keyword in lowered:
            signals.append(f"Critical keyword found: {keyword}")
            break

    if any(keyword in lowered for keyword in PERFORMANCE_KEYWORDS):
        signals.append(PERFORMANCE_SIGNAL)

    added, removed = count_diff_lines(diff_text)

    # Independent checks: overlapping thresholds may fire together
    if added > REFACTOR_MIN_LINES and removed > REFACTOR_MIN_LINES:
        signals.append("Large refactoring detected")
    if added > FEATURE_MIN_ADDED and removed < FEATURE_MAX_REMOVED:
        signals.append("New feature implementation")
    if removed > BUGFIX_MIN_REMOVED and added < removed * BUGFIX_ADDED_RATIO:
        signals.append("Bug fix pattern detected")

    return signals


def classify_impact(
    commit: CommitRecord, diff_text: str | None = None
) -> ImpactAssessment:
    """Score one commit. Never raises.

    *diff_text* is ``None`` when the diff could not be retrieved; the
    keyword and structural checks are then skipped.
    """
    total_lines = commit.total_lines
    files_modified = commit.file_count
    critical_files = 0
    signals: list[str] = []
    file_types: set[str] = set()

    for path in commit.files or ():
        if is_critical_path(path):
            critical_files += 1
            signals.append(f"Critical file modified: {path}")
        category = detect_file_type(path)
        if category is not None:
            file_types.add(category)

    if diff_text is not None:
        signals.extend(_diff_signals(diff_text))

    line_medium = MODERATE_CHANGE_LINES <= total_lines <= LARGE_CHANGE_LINES
    file_medium = MULTIPLE_FILES_MIN <= files_modified <= MULTIPLE_FILES_MAX

    if (
        total_lines > LARGE_CHANGE_LINES
        or critical_files > 0
        or any("Critical" in s for s in signals)
    ):
        level = ImpactLevel.HIGH
        if total_lines > LARGE_CHANGE_LINES:
            signals.append(f"Large change: {total_lines} lines")
    elif (
        line_medium
        or file_medium
        or any("Performance" in s for s in signals)
    ):
        level = ImpactLevel.MEDIUM
        if line_medium:
            signals.append(f"Moderate change: {total_lines} lines")
        if file_medium:
            signals.append(f"Multiple files: {files_modified} files")
    else:
        level = ImpactLevel.LOW
        if total_lines < MODERATE_CHANGE_LINES:
            signals.append(f"Small change: {total_lines} lines")
        if files_modified <= FEW_FILES_MAX:
            signals.append(f"Few files: {files_modified} file(s)")

    return ImpactAssessment(
        impact_level=level,
        signals=signals or [STANDARD_COMMIT_SIGNAL],
        file_types=sorted(file_types),
        change_metrics=ChangeMetrics(
            total_lines=total_lines,
            files_modified=files_modified,
            critical_files_modified=critical_files,
        ),
    )


async def assess_impact(
    commit: CommitRecord, source: DiffProvider
) -> ImpactAssessment:
    """Fetch the commit's diff and classify it."""
    diff_text = await source.get_diff_or_none(commit.hash)
    if diff_text is None:
        logger.debug(
            "event=impact_metadata_only commit=%s", commit.hash[:8]
        )
    return classify_impact(commit, diff_text)
