"""Achievement synthesis: references, generative backends, patterns."""

from careerlog.synthesis.backends import (
    GenerativeBackend,
    build_backends,
    guarded_completion,
)
from careerlog.synthesis.pattern_rules import (
    extract_action,
    extract_component,
    synthesize_from_patterns,
)
from careerlog.synthesis.schemas import AchievementResult
from careerlog.synthesis.synthesizer import (
    AchievementSynthesizer,
    SynthesisContext,
)

__all__ = [
    "AchievementResult",
    "AchievementSynthesizer",
    "GenerativeBackend",
    "SynthesisContext",
    "build_backends",
    "extract_action",
    "extract_component",
    "guarded_completion",
    "synthesize_from_patterns",
]
