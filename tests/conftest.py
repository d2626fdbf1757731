"""Shared test fixtures: deterministic settings, commit factory."""

import os

# Drop CAREERLOG_* variables from the shell; the chdir fixture below
# keeps a developer .env out of Settings() as well.
for _key in list(os.environ):
    if _key.startswith("CAREERLOG_"):
        del os.environ[_key]

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import pytest
from circuitbreaker import CircuitBreakerMonitor

from careerlog.analysis.schemas import ChangeMetrics, ImpactAssessment
from careerlog.config import Settings
from careerlog.constants import ImpactLevel
from careerlog.ingestion.schemas import CommitRecord
from careerlog.synthesis.backends import _breaker_registry


@pytest.fixture(autouse=True)
def _isolated_cwd(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Run every test from an empty directory so no .env file is read."""
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))


@pytest.fixture(autouse=True)
def _reset_breakers() -> None:
    """Reset circuit breakers between tests."""
    _breaker_registry.clear()
    for cb in CircuitBreakerMonitor.get_circuits():
        cb.reset()  # type: ignore[union-attr]


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def make_commit() -> Callable[..., CommitRecord]:
    """Factory for CommitRecord with sensible defaults."""

    def _make(**overrides: Any) -> CommitRecord:
        data: dict[str, Any] = {
            "hash": "abc123def4567890",
            "author": "Dev <dev@example.com>",
            "date": datetime(2024, 1, 1, 12, 0, tzinfo=UTC),
            "subject": "Implement user authentication",
            "body": "Add login and signup functionality",
            "files": ("src/auth/login.ts", "src/auth/signup.ts"),
            "insertions": 200,
            "deletions": 10,
        }
        data.update(overrides)
        return CommitRecord(**data)

    return _make


@pytest.fixture
def make_assessment() -> Callable[..., ImpactAssessment]:
    def _make(
        level: ImpactLevel = ImpactLevel.HIGH,
        files_modified: int = 2,
        signals: list[str] | None = None,
    ) -> ImpactAssessment:
        return ImpactAssessment(
            impact_level=level,
            signals=signals or ["New feature implementation"],
            file_types=["TypeScript"],
            change_metrics=ChangeMetrics(
                total_lines=210,
                files_modified=files_modified,
                critical_files_modified=0,
            ),
        )

    return _make
