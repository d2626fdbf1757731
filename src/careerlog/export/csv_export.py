"""CSV export: one row per entry."""

from __future__ import annotations

import csv
import io

from careerlog.services.schemas import CareerLog

CSV_HEADERS = (
    "Date",
    "Achievement",
    "Impact",
    "Files Changed",
    "Lines Changed",
    "File Types",
    "Signals",
    "Critical Files",
    "Commit Hash",
)


def export_csv(log: CareerLog) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for entry in log.entries:
        writer.writerow([
            entry.date.isoformat(),
            entry.achievement,
            entry.impact.value,
            entry.files_changed,
            entry.lines_changed,
            "; ".join(entry.file_types),
            "; ".join(entry.signals[:2]),
            entry.change_metrics.critical_files_modified,
            entry.commit,
        ])
    return buf.getvalue()
