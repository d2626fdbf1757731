"""Career log models: the pipeline's output envelope."""

from datetime import datetime

from pydantic import BaseModel, Field

from careerlog.analysis.schemas import ChangeMetrics
from careerlog.constants import ImpactLevel


class CareerLogEntry(BaseModel):
    """One achievement with the commit evidence behind it."""

    date: datetime
    achievement: str
    confidence: float = Field(ge=0.0, le=1.0)
    ai_generated: bool = False
    data_local: bool = True
    impact: ImpactLevel
    commit: str
    files_changed: int = 0
    lines_changed: int = 0
    signals: list[str] = Field(default_factory=lambda: list[str]())
    file_types: list[str] = Field(default_factory=lambda: list[str]())
    change_metrics: ChangeMetrics = Field(default_factory=ChangeMetrics)


class CareerLog(BaseModel):
    """All entries of one run, newest first."""

    generated_at: datetime
    repository: str
    total_commits: int
    entries: list[CareerLogEntry] = Field(
        default_factory=lambda: list[CareerLogEntry]()
    )

    def count_by_impact(self) -> dict[ImpactLevel, int]:
        counts = {level: 0 for level in ImpactLevel}
        for entry in self.entries:
            counts[entry.impact] += 1
        return counts
