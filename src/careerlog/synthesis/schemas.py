"""Result type of achievement synthesis."""

from __future__ import annotations

from dataclasses import dataclass

from careerlog.constants import Provenance


@dataclass(frozen=True)
class AchievementResult:
    """One achievement sentence and how it was produced."""

    achievement: str
    confidence: float
    provenance: Provenance = Provenance.PATTERN
    data_local: bool = True
    strategy: str = ""

    @property
    def ai_generated(self) -> bool:
        return self.provenance == Provenance.BACKEND
