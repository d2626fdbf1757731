"""Pydantic models for impact classification output."""

from pydantic import BaseModel, ConfigDict, Field

from careerlog.constants import ImpactLevel


class ChangeMetrics(BaseModel):
    """Size measures of a single commit."""

    model_config = ConfigDict(frozen=True)

    total_lines: int = 0
    files_modified: int = 0
    critical_files_modified: int = 0


class ImpactAssessment(BaseModel):
    """Tier plus the evidence that produced it. Recomputed per commit."""

    model_config = ConfigDict(frozen=True)

    impact_level: ImpactLevel
    signals: list[str] = Field(min_length=1)
    file_types: list[str] = Field(default_factory=lambda: list[str]())
    change_metrics: ChangeMetrics = Field(default_factory=ChangeMetrics)
