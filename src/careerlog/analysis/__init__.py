"""Impact classification of individual commits."""

from careerlog.analysis.impact import (
    assess_impact,
    classify_impact,
    count_diff_lines,
)
from careerlog.analysis.schemas import ChangeMetrics, ImpactAssessment

__all__ = [
    "ChangeMetrics",
    "ImpactAssessment",
    "assess_impact",
    "classify_impact",
    "count_diff_lines",
]
