"""Pipeline orchestration: commits in, ordered career log out.

Commits are processed one at a time: diff retrieval, impact
classification, reference resolution and synthesis for one commit
complete before the next commit starts.
"""

from __future__ import annotations

import logging
import random
import time
from datetime import UTC, datetime
from pathlib import Path

from careerlog.analysis.impact import classify_impact
from careerlog.analysis.schemas import ImpactAssessment
from careerlog.config import Settings
from careerlog.constants import SHORT_HASH_CHARS, ImpactLevel, StageProgress
from careerlog.ingestion.git_source import GitSource
from careerlog.ingestion.schemas import CommitRecord, LogQuery
from careerlog.references.resolver import ReferenceResolver
from careerlog.services.events import ProgressCallback, StageEvent
from careerlog.services.schemas import CareerLog, CareerLogEntry
from careerlog.synthesis.schemas import AchievementResult
from careerlog.synthesis.synthesizer import AchievementSynthesizer

logger = logging.getLogger(__name__)


class NoCommitsError(RuntimeError):
    """The git source returned no commits for the requested range."""


def build_entry(
    commit: CommitRecord,
    assessment: ImpactAssessment,
    result: AchievementResult,
) -> CareerLogEntry:
    return CareerLogEntry(
        date=commit.date,
        achievement=result.achievement,
        confidence=result.confidence,
        ai_generated=result.ai_generated,
        data_local=result.data_local,
        impact=assessment.impact_level,
        commit=commit.hash[:SHORT_HASH_CHARS],
        files_changed=commit.file_count,
        lines_changed=commit.total_lines,
        signals=assessment.signals,
        file_types=assessment.file_types,
        change_metrics=assessment.change_metrics,
    )


def _emit(
    on_progress: ProgressCallback | None, event: StageEvent
) -> None:
    if on_progress is not None:
        on_progress(event)


async def generate_career_log(
    repo_path: Path,
    settings: Settings,
    query: LogQuery | None = None,
    *,
    git: GitSource | None = None,
    synthesizer: AchievementSynthesizer | None = None,
    rng: random.Random | None = None,
    on_progress: ProgressCallback | None = None,
) -> CareerLog:
    """Run extraction, classification and synthesis for a repository.

    Raises :class:`NoCommitsError` when the range holds no commits and
    propagates :class:`~careerlog.ingestion.git_source.GitCommandError`
    when ``git log`` itself fails.
    """
    start = time.monotonic()
    repo_path = Path(repo_path)
    source = git or GitSource(repo_path)
    random_source = rng or random.Random(settings.random_seed)

    _emit(on_progress, StageEvent("extract", StageProgress.RUNNING))
    commits = await source.list_commits(query)
    if not commits:
        raise NoCommitsError(f"No commits found in {repo_path}")
    _emit(
        on_progress,
        StageEvent("extract", StageProgress.DONE, total=len(commits)),
    )

    resolver: ReferenceResolver | None = None
    if synthesizer is None:
        resolver = ReferenceResolver(
            settings, remote_url_provider=source.get_remote_url
        )
        synthesizer = AchievementSynthesizer(
            settings, resolver, rng=random_source
        )

    entries: list[CareerLogEntry] = []
    try:
        _emit(on_progress, StageEvent("analyze", StageProgress.RUNNING))
        for index, commit in enumerate(commits, 1):
            diff_text = await source.get_diff_or_none(commit.hash)
            assessment = classify_impact(commit, diff_text)

            if (
                settings.skip_low_impact
                and assessment.impact_level == ImpactLevel.LOW
                and random_source.random() < settings.low_impact_drop_rate
            ):
                logger.debug(
                    "event=commit_dropped commit=%s reason=low_impact",
                    commit.hash[:SHORT_HASH_CHARS],
                )
                continue

            result = await synthesizer.synthesize(
                commit, assessment, diff_text
            )
            if result.confidence < settings.confidence_threshold:
                logger.debug(
                    "event=commit_dropped commit=%s reason=confidence"
                    " confidence=%.2f",
                    commit.hash[:SHORT_HASH_CHARS],
                    result.confidence,
                )
                continue

            entries.append(build_entry(commit, assessment, result))
            _emit(
                on_progress,
                StageEvent(
                    "synthesize",
                    StageProgress.RUNNING,
                    message=result.achievement,
                    completed=index,
                    total=len(commits),
                ),
            )
    finally:
        if resolver is not None:
            await resolver.close()

    entries.sort(key=lambda e: e.date, reverse=True)
    _emit(
        on_progress,
        StageEvent("synthesize", StageProgress.DONE, total=len(entries)),
    )
    logger.info(
        "event=career_log_generated commits=%d entries=%d duration_ms=%.0f",
        len(commits),
        len(entries),
        (time.monotonic() - start) * 1000,
    )

    return CareerLog(
        generated_at=datetime.now(UTC),
        repository=str(repo_path.resolve()),
        total_commits=len(commits),
        entries=entries,
    )
