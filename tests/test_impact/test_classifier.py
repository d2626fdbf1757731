"""Tests for commit impact classification."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest

from careerlog.analysis.impact import (
    assess_impact,
    classify_impact,
    count_diff_lines,
    detect_file_type,
    is_critical_path,
)
from careerlog.constants import ImpactLevel
from careerlog.ingestion.schemas import CommitRecord

MakeCommit = Callable[..., CommitRecord]


def _diff(added: int, removed: int, filler: str = "line") -> str:
    lines = [f"+{filler} {i}" for i in range(added)]
    lines += [f"-{filler} {i}" for i in range(removed)]
    return "\n".join(lines)


# ── tier decision ────────────────────────────────────────────


class TestTier:
    def test_large_change_is_high(self, make_commit: MakeCommit) -> None:
        """600 lines, one file, no keywords, no diff → high."""
        commit = make_commit(
            files=("notes.txt",), insertions=600, deletions=0
        )
        result = classify_impact(commit, None)
        assert result.impact_level == ImpactLevel.HIGH
        assert "Large change: 600 lines" in result.signals

    @pytest.mark.parametrize("files", [(), ("a.txt",), tuple(f"f{i}" for i in range(30))])
    def test_over_500_lines_always_high(
        self, make_commit: MakeCommit, files: tuple[str, ...]
    ) -> None:
        commit = make_commit(files=files, insertions=400, deletions=101)
        assert classify_impact(commit).impact_level == ImpactLevel.HIGH

    @pytest.mark.parametrize(
        "path",
        [
            "package.json",
            "yarn.lock",
            "Dockerfile",
            "db/migrations/001_init.sql",
            "src/auth/session.py",
            ".github/workflows/ci.yml",
            ".env.production",
            "app.config.js",
        ],
    )
    def test_critical_path_is_high(
        self, make_commit: MakeCommit, path: str
    ) -> None:
        commit = make_commit(files=(path,), insertions=1, deletions=0)
        result = classify_impact(commit)
        assert result.impact_level == ImpactLevel.HIGH
        assert f"Critical file modified: {path}" in result.signals
        assert result.change_metrics.critical_files_modified == 1

    def test_critical_keyword_in_diff_is_high(
        self, make_commit: MakeCommit
    ) -> None:
        commit = make_commit(files=("main.go",), insertions=2, deletions=1)
        result = classify_impact(commit, "+// HOTFIX for prod\n-old")
        assert result.impact_level == ImpactLevel.HIGH
        assert "Critical keyword found: hotfix" in result.signals

    def test_moderate_lines_is_medium(self, make_commit: MakeCommit) -> None:
        commit = make_commit(files=("main.go",), insertions=150, deletions=0)
        result = classify_impact(commit)
        assert result.impact_level == ImpactLevel.MEDIUM
        assert "Moderate change: 150 lines" in result.signals
        assert not any(s.startswith("Multiple files") for s in result.signals)

    def test_multiple_files_is_medium(self, make_commit: MakeCommit) -> None:
        files = ("a.go", "b.go", "c.go", "d.go")
        commit = make_commit(files=files, insertions=20, deletions=5)
        result = classify_impact(commit)
        assert result.impact_level == ImpactLevel.MEDIUM
        assert result.signals == ["Multiple files: 4 files"]

    def test_both_medium_conditions_append_both(
        self, make_commit: MakeCommit
    ) -> None:
        files = ("a.go", "b.go", "c.go")
        commit = make_commit(files=files, insertions=100, deletions=0)
        result = classify_impact(commit)
        assert result.signals == [
            "Moderate change: 100 lines",
            "Multiple files: 3 files",
        ]

    def test_performance_signal_is_medium(
        self, make_commit: MakeCommit
    ) -> None:
        commit = make_commit(files=("main.go",), insertions=3, deletions=1)
        result = classify_impact(commit, "+reduce latency of the loop")
        assert result.impact_level == ImpactLevel.MEDIUM
        assert "Performance-related changes detected" in result.signals

    def test_small_change_is_low(self, make_commit: MakeCommit) -> None:
        commit = make_commit(files=("main.go",), insertions=5, deletions=2)
        result = classify_impact(commit, "+x\n-y")
        assert result.impact_level == ImpactLevel.LOW
        assert result.signals == [
            "Small change: 7 lines",
            "Few files: 1 file(s)",
        ]

    def test_eleven_files_small_diff_is_low_without_file_signal(
        self, make_commit: MakeCommit
    ) -> None:
        files = tuple(f"f{i}.go" for i in range(11))
        commit = make_commit(files=files, insertions=10, deletions=0)
        result = classify_impact(commit)
        assert result.impact_level == ImpactLevel.LOW
        assert result.signals == ["Small change: 10 lines"]

    def test_no_metadata_still_has_signals(
        self, make_commit: MakeCommit
    ) -> None:
        commit = make_commit(files=None, insertions=None, deletions=None)
        result = classify_impact(commit)
        assert result.impact_level == ImpactLevel.LOW
        assert result.change_metrics.total_lines == 0
        assert result.signals == [
            "Small change: 0 lines",
            "Few files: 0 file(s)",
        ]


# ── diff signals ─────────────────────────────────────────────


class TestDiffSignals:
    def test_only_first_critical_keyword_reported(
        self, make_commit: MakeCommit
    ) -> None:
        commit = make_commit(files=("x.go",), insertions=1, deletions=0)
        result = classify_impact(commit, "+security xss csrf")
        critical = [s for s in result.signals if "keyword" in s]
        assert critical == ["Critical keyword found: security"]

    def test_keyword_table_order_beats_text_order(
        self, make_commit: MakeCommit
    ) -> None:
        commit = make_commit(files=("x.go",), insertions=1, deletions=0)
        result = classify_impact(commit, "+urgent: cache warmup")
        assert "Critical keyword found: cache" in result.signals

    def test_large_refactoring(self, make_commit: MakeCommit) -> None:
        commit = make_commit(files=("x.go",), insertions=1, deletions=1)
        result = classify_impact(commit, _diff(150, 150))
        assert "Large refactoring detected" in result.signals

    def test_new_feature(self, make_commit: MakeCommit) -> None:
        commit = make_commit(files=("x.go",), insertions=1, deletions=1)
        result = classify_impact(commit, _diff(250, 10))
        assert "New feature implementation" in result.signals
        assert "Large refactoring detected" not in result.signals

    def test_bug_fix_pattern(self, make_commit: MakeCommit) -> None:
        commit = make_commit(files=("x.go",), insertions=1, deletions=1)
        result = classify_impact(commit, _diff(20, 80))
        assert "Bug fix pattern detected" in result.signals

    def test_structural_signals_may_fire_together(
        self, make_commit: MakeCommit
    ) -> None:
        commit = make_commit(files=("x.go",), insertions=1, deletions=1)
        result = classify_impact(commit, _diff(101, 300))
        assert "Large refactoring detected" in result.signals
        assert "Bug fix pattern detected" in result.signals

    def test_missing_diff_skips_diff_checks(
        self, make_commit: MakeCommit
    ) -> None:
        commit = make_commit(files=("x.go",), insertions=1, deletions=1)
        result = classify_impact(commit, None)
        assert not any("keyword" in s for s in result.signals)
        assert not any("detected" in s for s in result.signals)

    def test_count_diff_lines(self) -> None:
        diff = "+++ b/x\n--- a/x\n+new\n-old\n context"
        assert count_diff_lines(diff) == (2, 2)


# ── file tables ──────────────────────────────────────────────


class TestFileTables:
    @pytest.mark.parametrize(
        ("path", "category"),
        [
            ("src/App.TSX", "TypeScript"),
            ("lib/index.mjs", "JavaScript"),
            ("requirements.txt", "Python"),
            ("cmd/main.go", "Go"),
            ("docker-compose.yml", "Docker"),
            ("tests/helpers.txt", "Tests"),
            ("settings.yaml", "Config"),
            ("styles/site.scss", "CSS"),
            ("README.md", "Markdown"),
            ("scripts/run.sh", "Shell"),
            ("image.png", None),
        ],
    )
    def test_detect_file_type(self, path: str, category: str | None) -> None:
        assert detect_file_type(path) == category

    def test_file_types_are_sorted_and_unique(
        self, make_commit: MakeCommit
    ) -> None:
        commit = make_commit(
            files=("b.py", "a.ts", "c.py", "d.css"),
            insertions=1,
            deletions=0,
        )
        result = classify_impact(commit)
        assert result.file_types == ["CSS", "Python", "TypeScript"]

    def test_is_critical_path_case_insensitive(self) -> None:
        assert is_critical_path("DOCKERFILE")
        assert not is_critical_path("src/widgets/button.go")


async def test_assess_impact_fetches_diff(make_commit: MakeCommit) -> None:
    source = AsyncMock()
    source.get_diff_or_none.return_value = "+sql injection guard"
    commit = make_commit(files=("x.go",), insertions=1, deletions=0)

    result = await assess_impact(commit, source)

    source.get_diff_or_none.assert_awaited_once_with(commit.hash)
    assert "Critical keyword found: sql injection" in result.signals


async def test_assess_impact_tolerates_missing_diff(
    make_commit: MakeCommit,
) -> None:
    source = AsyncMock()
    source.get_diff_or_none.return_value = None
    commit = make_commit(files=("x.go",), insertions=600, deletions=0)

    result = await assess_impact(commit, source)

    assert result.impact_level == ImpactLevel.HIGH
