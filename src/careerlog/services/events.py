"""Shared event types for pipeline progress reporting."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeAlias

from careerlog.constants import StageProgress

STAGE_LABELS: dict[str, str] = {
    "extract": "Extracting commits from repository",
    "analyze": "Analyzing impact signals",
    "synthesize": "Generating achievements",
}


@dataclass(frozen=True)
class StageEvent:
    """Typed event emitted during pipeline progress."""

    name: str
    status: StageProgress
    message: str = ""
    completed: int | None = None
    total: int | None = None

    @property
    def label(self) -> str:
        """User-friendly display label from STAGE_LABELS."""
        return STAGE_LABELS[self.name]


ProgressCallback: TypeAlias = Callable[[StageEvent], None]
