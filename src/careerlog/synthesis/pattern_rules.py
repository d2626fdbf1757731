"""Local, keyword-driven achievement synthesis.

No data leaves the machine. Produces a component label, an action
gerund and a sentence from the first matching template, or a generic
sentence built from the impact tier when no template matches.
"""

from __future__ import annotations

from collections.abc import Sequence

from careerlog.analysis.impact import count_diff_lines
from careerlog.analysis.schemas import ImpactAssessment
from careerlog.constants import MAJOR_FEATURE_FILES, Confidence, ImpactLevel
from careerlog.ingestion.schemas import CommitRecord
from careerlog.patterns import (
    ACHIEVEMENT_TEMPLATES,
    ACTION_KEYWORDS,
    COMPONENT_EXTENSION_FALLBACKS,
    COMPONENT_PATTERNS,
    DEFAULT_COMPONENT,
)


def _title(name: str) -> str:
    return name[:1].upper() + name[1:]


def score_components(
    files: Sequence[str], diff_text: str = ""
) -> dict[str, int]:
    """Score each component: 2 per matching path, 1 per diff occurrence."""
    lowered = diff_text.lower()
    scores: dict[str, int] = {}
    for component, patterns in COMPONENT_PATTERNS.items():
        score = 0
        for pattern in patterns:
            score += 2 * sum(1 for f in files if pattern.search(f))
            score += len(pattern.findall(lowered))
        if score > 0:
            scores[component] = score
    return scores


def extract_component(files: Sequence[str], diff_text: str = "") -> str:
    """Highest-scoring component, title-cased; ties keep table order."""
    scores = score_components(files, diff_text)
    if scores:
        # max() returns the first maximal key in insertion order
        return _title(max(scores, key=lambda name: scores[name]))

    for label, pattern in COMPONENT_EXTENSION_FALLBACKS:
        if any(pattern.search(f) for f in files):
            return label
    return DEFAULT_COMPONENT


def extract_action(commit_text: str, diff_text: str = "") -> str:
    """Gerund for the first action keyword found, else from diff shape."""
    combined = f"{commit_text} {diff_text}".lower()
    for gerund, keywords in ACTION_KEYWORDS:
        if any(keyword in combined for keyword in keywords):
            return gerund

    added, removed = count_diff_lines(diff_text)
    if added > removed * 2:
        return "implementing"
    if removed > added * 2:
        return "fixing"
    return "improving"


def _generic_sentence(component: str, assessment: ImpactAssessment) -> str:
    name = component.lower()
    files = assessment.change_metrics.files_modified
    if assessment.impact_level == ImpactLevel.HIGH:
        if files > MAJOR_FEATURE_FILES:
            return f"Delivered major {name} feature affecting {files} modules"
        return f"Completed high-impact {name} work"
    if assessment.impact_level == ImpactLevel.MEDIUM:
        return f"Delivered {name} feature"
    return f"Made {name} improvements"


def synthesize_from_patterns(
    commit: CommitRecord,
    assessment: ImpactAssessment,
    diff_text: str | None = None,
) -> tuple[str, float]:
    """Return ``(achievement, confidence)`` from the local rule tables.

    Confidence is 0.75 for a matched template and 0.6 for the generic
    tier-based sentence.
    """
    diff = diff_text or ""
    commit_text = commit.full_message
    combined = f"{commit_text} {diff}".lower()

    component = extract_component(commit.files or (), diff)
    action = extract_action(commit_text, diff)

    for template in ACHIEVEMENT_TEMPLATES:
        if any(keyword in combined for keyword in template.keywords):
            text = template.render(
                component, action, assessment.change_metrics.files_modified
            )
            return text, Confidence.PATTERN_TEMPLATE

    return _generic_sentence(component, assessment), Confidence.PATTERN_FALLBACK
