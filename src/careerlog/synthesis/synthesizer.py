"""Achievement synthesis as an ordered chain of strategies.

Strategies run in order and the first non-empty result wins:

1. ``reference``: PR/MR title (0.9) or ``Reference #<n>`` (0.7)
2. ``backend``: remote (0.95) or local (0.85) generative backend
3. ``patterns``: local keyword templates (0.75) or tier sentence (0.6)
4. ``subject``: raw commit subject, truncated to 60 characters
"""

from __future__ import annotations

import logging
import random
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import TypeAlias

from careerlog.analysis.schemas import ImpactAssessment
from careerlog.config import Settings
from careerlog.constants import (
    SUBJECT_FALLBACK_CHARS,
    Confidence,
    ImpactLevel,
    Provenance,
)
from careerlog.ingestion.schemas import CommitRecord
from careerlog.prompts import build_achievement_prompt
from careerlog.references.resolver import ReferenceResolver
from careerlog.synthesis.backends import GenerativeBackend, build_backends
from careerlog.synthesis.pattern_rules import synthesize_from_patterns
from careerlog.synthesis.schemas import AchievementResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SynthesisContext:
    """Inputs shared by every strategy for one commit."""

    commit: CommitRecord
    assessment: ImpactAssessment
    diff_text: str | None
    skip_backend: bool


Strategy: TypeAlias = Callable[[SynthesisContext], Awaitable[AchievementResult | None]]


class AchievementSynthesizer:
    """Produces exactly one :class:`AchievementResult` per commit."""

    def __init__(
        self,
        settings: Settings,
        resolver: ReferenceResolver,
        backends: Sequence[GenerativeBackend] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._settings = settings
        self._resolver = resolver
        self._backends = (
            list(backends) if backends is not None
            else build_backends(settings)
        )
        self._rng = rng or random.Random(settings.random_seed)
        self.strategies: list[tuple[str, Strategy]] = [
            ("reference", self._from_reference),
            ("backend", self._from_backend),
            ("patterns", self._from_patterns),
            ("subject", self._from_subject),
        ]

    @property
    def backends(self) -> list[GenerativeBackend]:
        return list(self._backends)

    def should_skip_backend(self, assessment: ImpactAssessment) -> bool:
        """Random sampling that bounds backend calls for low-impact commits."""
        if assessment.impact_level != ImpactLevel.LOW:
            return False
        if not self._settings.backend_configured:
            return False
        return self._rng.random() < self._settings.low_impact_backend_skip_rate

    async def synthesize(
        self,
        commit: CommitRecord,
        assessment: ImpactAssessment,
        diff_text: str | None = None,
    ) -> AchievementResult:
        ctx = SynthesisContext(
            commit=commit,
            assessment=assessment,
            diff_text=diff_text,
            skip_backend=self.should_skip_backend(assessment),
        )
        if ctx.skip_backend:
            logger.debug(
                "event=backend_skipped commit=%s impact=%s",
                commit.hash[:8],
                assessment.impact_level,
            )

        for name, strategy in self.strategies:
            result = await strategy(ctx)
            if result is not None and result.achievement:
                logger.debug(
                    "event=achievement_synthesized commit=%s strategy=%s"
                    " confidence=%.2f",
                    commit.hash[:8],
                    name,
                    result.confidence,
                )
                return result

        # Unreachable while the subject strategy is last in the chain
        return AchievementResult(
            achievement=commit.subject[:SUBJECT_FALLBACK_CHARS],
            confidence=Confidence.PATTERN_TEMPLATE,
            strategy="subject",
        )

    async def _from_reference(
        self, ctx: SynthesisContext
    ) -> AchievementResult | None:
        if ctx.skip_backend or not self._resolver.should_use_reference(
            ctx.commit
        ):
            return None
        info = await self._resolver.get_reference_info(ctx.commit)
        if info is None:
            return None
        if info.title:
            return AchievementResult(
                achievement=info.title,
                confidence=Confidence.REFERENCE_TITLE,
                strategy="reference",
            )
        return AchievementResult(
            achievement=f"Reference #{info.number}",
            confidence=Confidence.REFERENCE_NUMBER,
            strategy="reference",
        )

    async def _from_backend(
        self, ctx: SynthesisContext
    ) -> AchievementResult | None:
        # Hard override, checked before any network attempt
        if self._settings.enterprise:
            return None
        if ctx.skip_backend or not self._backends:
            return None

        prompt = build_achievement_prompt(
            ctx.commit,
            ctx.assessment,
            ctx.diff_text,
            self._settings.diff_prompt_chars,
        )
        for backend in self._backends:
            text = await backend.generate(prompt)
            if text:
                return AchievementResult(
                    achievement=text,
                    confidence=backend.confidence,
                    provenance=Provenance.BACKEND,
                    data_local=backend.data_local,
                    strategy="backend",
                )
        return None

    async def _from_patterns(
        self, ctx: SynthesisContext
    ) -> AchievementResult | None:
        text, confidence = synthesize_from_patterns(
            ctx.commit, ctx.assessment, ctx.diff_text
        )
        if not text:
            return None
        return AchievementResult(
            achievement=text,
            confidence=confidence,
            strategy="patterns",
        )

    async def _from_subject(
        self, ctx: SynthesisContext
    ) -> AchievementResult | None:
        text = ctx.commit.subject[:SUBJECT_FALLBACK_CHARS]
        if not text:
            return None
        return AchievementResult(
            achievement=text,
            confidence=Confidence.PATTERN_TEMPLATE,
            strategy="subject",
        )
