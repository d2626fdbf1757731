"""Export module: JSON, Markdown and CSV career logs."""

from collections.abc import Callable

from careerlog.constants import ExportFormat
from careerlog.export.csv_export import export_csv
from careerlog.export.json_export import export_json, load_json
from careerlog.export.markdown import export_markdown
from careerlog.services.schemas import CareerLog

__all__ = [
    "export_career_log",
    "export_csv",
    "export_json",
    "export_markdown",
    "load_json",
]

_EXPORTERS: dict[str, Callable[[CareerLog], str]] = {
    ExportFormat.JSON: export_json,
    ExportFormat.MARKDOWN: export_markdown,
    ExportFormat.CSV: export_csv,
}


def export_career_log(log: CareerLog, fmt: str = "json") -> str:
    """Dispatch export by format string."""
    exporter = _EXPORTERS.get(fmt)
    if exporter is None:
        valid = ", ".join(_EXPORTERS)
        msg = f"Unsupported format: {fmt}. Use: {valid}"
        raise ValueError(msg)
    return exporter(log)
