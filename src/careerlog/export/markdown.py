"""Markdown export: entries grouped by calendar date, newest first."""

from __future__ import annotations

from collections import defaultdict

from careerlog.constants import STANDARD_COMMIT_SIGNAL, ImpactLevel
from careerlog.services.schemas import CareerLog, CareerLogEntry

IMPACT_BADGES: dict[ImpactLevel, str] = {
    ImpactLevel.HIGH: "🔥",
    ImpactLevel.MEDIUM: "⭐",
    ImpactLevel.LOW: "📝",
}


def _entry_lines(entry: CareerLogEntry) -> list[str]:
    badge = IMPACT_BADGES[entry.impact]
    lines = [f"- {badge} **{entry.achievement}**"]
    if entry.files_changed or entry.lines_changed:
        lines.append(
            f"  - Files: {entry.files_changed}, "
            f"Lines: {entry.lines_changed}"
        )
    if entry.file_types:
        lines.append(f"  - File Types: {', '.join(entry.file_types)}")
    if entry.signals and entry.signals[0] != STANDARD_COMMIT_SIGNAL:
        lines.append(f"  - Signals: {'; '.join(entry.signals[:3])}")
    critical = entry.change_metrics.critical_files_modified
    if critical > 0:
        lines.append(f"  - ⚠️ Critical files modified: {critical}")
    return lines


def export_markdown(log: CareerLog) -> str:
    """Render the log as a Markdown document."""
    parts: list[str] = [
        "# Career Log\n",
        f"**Repository:** {log.repository}",
        f"**Generated:** {log.generated_at.isoformat()}",
        f"**Total Commits:** {log.total_commits}\n",
        "---\n",
    ]

    by_date: dict[str, list[CareerLogEntry]] = defaultdict(list)
    for entry in log.entries:
        by_date[entry.date.date().isoformat()].append(entry)

    for day in sorted(by_date, reverse=True):
        parts.append(f"## {day}\n")
        for entry in by_date[day]:
            parts.extend(_entry_lines(entry))
        parts.append("")

    return "\n".join(parts)
