"""Prompt text for generative achievement backends."""

from __future__ import annotations

from careerlog.analysis.schemas import ImpactAssessment
from careerlog.constants import BACKEND_MAX_CHARS
from careerlog.ingestion.schemas import CommitRecord

ACHIEVEMENT_SYSTEM_PROMPT = (
    "You are a professional career log generator. Generate concise, "
    "impactful achievement statements from git commits."
)


def build_achievement_prompt(
    commit: CommitRecord,
    assessment: ImpactAssessment,
    diff_text: str | None,
    diff_chars: int,
) -> str:
    """User prompt describing one commit and its impact evidence."""
    lines = [
        "Analyze this git commit and generate a professional achievement "
        f"statement (max {BACKEND_MAX_CHARS} characters).",
        "",
        f"Commit Message: {commit.subject}",
    ]
    if commit.body:
        lines.append(f"Commit Body: {commit.body}")
    lines.extend([
        f"Files Changed: {', '.join(commit.files or ()) or 'None'}",
        f"Lines Changed: +{commit.insertions or 0} / "
        f"-{commit.deletions or 0}",
        f"Impact Level: {assessment.impact_level}",
        f"Signals: {', '.join(assessment.signals)}",
        f"File Types: {', '.join(assessment.file_types)}",
        "",
        "Diff Summary:",
        f"{(diff_text or '')[:diff_chars]}...",
        "",
        "Generate a concise, professional achievement statement that:",
        "- Highlights the key accomplishment",
        "- Mentions the component/area affected",
        "- Is suitable for a resume or career log",
        f"- Is maximum {BACKEND_MAX_CHARS} characters",
        "",
        "Return only the achievement statement, no additional text.",
    ])
    return "\n".join(lines)
