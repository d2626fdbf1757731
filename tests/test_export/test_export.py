"""Tests for JSON, Markdown and CSV export."""

from __future__ import annotations

import csv
import io
import json
from datetime import UTC, datetime

import pytest

from careerlog.analysis.schemas import ChangeMetrics
from careerlog.constants import STANDARD_COMMIT_SIGNAL, ImpactLevel
from careerlog.export import (
    export_career_log,
    export_csv,
    export_json,
    export_markdown,
    load_json,
)
from careerlog.export.csv_export import CSV_HEADERS
from careerlog.services.schemas import CareerLog, CareerLogEntry


def _entry(**overrides: object) -> CareerLogEntry:
    data: dict[str, object] = {
        "date": datetime(2024, 3, 2, 9, 30, tzinfo=UTC),
        "achievement": "Implemented Auth feature affecting 2 modules",
        "confidence": 0.75,
        "impact": ImpactLevel.HIGH,
        "commit": "abc123de",
        "files_changed": 2,
        "lines_changed": 210,
        "signals": [
            "Critical file modified: src/auth/login.ts",
            "New feature implementation",
            "Large change: 600 lines",
        ],
        "file_types": ["TypeScript"],
        "change_metrics": ChangeMetrics(
            total_lines=210, files_modified=2, critical_files_modified=1
        ),
    }
    data.update(overrides)
    return CareerLogEntry(**data)  # type: ignore[arg-type]


@pytest.fixture
def career_log() -> CareerLog:
    return CareerLog(
        generated_at=datetime(2024, 3, 3, tzinfo=UTC),
        repository="/work/app",
        total_commits=3,
        entries=[
            _entry(),
            _entry(
                date=datetime(2024, 3, 2, 8, 0, tzinfo=UTC),
                achievement='Fixed "API", bug',
                impact=ImpactLevel.MEDIUM,
                commit="def45678",
                signals=["Multiple files: 4 files"],
                change_metrics=ChangeMetrics(),
            ),
            _entry(
                date=datetime(2024, 2, 28, tzinfo=UTC),
                achievement="Made system improvements",
                impact=ImpactLevel.LOW,
                commit="0badc0de",
                files_changed=0,
                lines_changed=0,
                file_types=[],
                signals=[STANDARD_COMMIT_SIGNAL],
                change_metrics=ChangeMetrics(),
            ),
        ],
    )


class TestJson:
    def test_round_trip(self, career_log: CareerLog) -> None:
        assert load_json(export_json(career_log)) == career_log

    def test_field_names(self, career_log: CareerLog) -> None:
        data = json.loads(export_json(career_log))
        assert set(data) == {
            "generated_at",
            "repository",
            "total_commits",
            "entries",
        }
        entry = data["entries"][0]
        assert entry["impact"] == "high"
        assert entry["ai_generated"] is False
        assert entry["data_local"] is True
        assert entry["change_metrics"]["critical_files_modified"] == 1


class TestMarkdown:
    def test_groups_by_date_newest_first(self, career_log: CareerLog) -> None:
        md = export_markdown(career_log)
        assert md.startswith("# Career Log\n")
        assert "**Repository:** /work/app" in md
        assert md.index("## 2024-03-02") < md.index("## 2024-02-28")
        assert md.count("## 2024-03-02") == 1

    def test_badges_and_details(self, career_log: CareerLog) -> None:
        md = export_markdown(career_log)
        assert "- 🔥 **Implemented Auth feature affecting 2 modules**" in md
        assert '- ⭐ **Fixed "API", bug**' in md
        assert "- 📝 **Made system improvements**" in md
        assert "  - Files: 2, Lines: 210" in md
        assert "  - File Types: TypeScript" in md
        assert "  - ⚠️ Critical files modified: 1" in md

    def test_signals_limited_to_three(self) -> None:
        entry = _entry(signals=["a", "b", "c", "d"])
        log = CareerLog(
            generated_at=datetime(2024, 1, 1, tzinfo=UTC),
            repository="r",
            total_commits=1,
            entries=[entry],
        )
        assert "  - Signals: a; b; c\n" in export_markdown(log)

    def test_standard_commit_signal_hidden(
        self, career_log: CareerLog
    ) -> None:
        assert STANDARD_COMMIT_SIGNAL not in export_markdown(career_log)


class TestCsv:
    def _rows(self, career_log: CareerLog) -> list[list[str]]:
        return list(csv.reader(io.StringIO(export_csv(career_log))))

    def test_header(self, career_log: CareerLog) -> None:
        assert tuple(self._rows(career_log)[0]) == CSV_HEADERS

    def test_row_values(self, career_log: CareerLog) -> None:
        row = self._rows(career_log)[1]
        assert row[0] == "2024-03-02T09:30:00+00:00"
        assert row[2] == "high"
        assert row[3:5] == ["2", "210"]
        assert row[6] == (
            "Critical file modified: src/auth/login.ts; "
            "New feature implementation"
        )
        assert row[7] == "1"
        assert row[8] == "abc123de"

    def test_quotes_commas_and_quotes(self, career_log: CareerLog) -> None:
        text = export_csv(career_log)
        assert '"Fixed ""API"", bug"' in text
        assert self._rows(career_log)[2][1] == 'Fixed "API", bug'


class TestDispatch:
    @pytest.mark.parametrize("fmt", ["json", "md", "csv"])
    def test_known_formats(self, career_log: CareerLog, fmt: str) -> None:
        assert export_career_log(career_log, fmt)

    def test_unknown_format(self, career_log: CareerLog) -> None:
        with pytest.raises(ValueError, match="Unsupported format: xml"):
            export_career_log(career_log, "xml")
