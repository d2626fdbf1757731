"""Shared constants: single source of truth for cross-module values.

All magic strings and numbers that appear in 2+ files belong here.
StrEnum members are str-compatible, so downstream code (JSON, CSV,
log lines) works unchanged.
"""

from __future__ import annotations

from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class ImpactLevel(StrEnum):
    """Coarse significance tier of a single commit."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Provenance(StrEnum):
    """Where an achievement's text came from."""

    PATTERN = "pattern"
    BACKEND = "backend"


class Platform(StrEnum):
    """Hosting platform detected from the origin remote."""

    GITHUB = "github"
    GITLAB = "gitlab"
    UNKNOWN = "unknown"


class ExportFormat(StrEnum):
    """Supported career log output formats."""

    JSON = "json"
    MARKDOWN = "md"
    CSV = "csv"


class StageProgress(StrEnum):
    """Progress status for pipeline stage events."""

    RUNNING = "running"
    DONE = "done"


# ── Confidence Scores ────────────────────────────────────


class Confidence:
    """Named confidence scores: one per achievement code path."""

    REMOTE_BACKEND = 0.95  # Remote generative backend
    REFERENCE_TITLE = 0.90  # PR/MR title used verbatim
    LOCAL_BACKEND = 0.85  # Local generative backend
    PATTERN_TEMPLATE = 0.75  # Matched achievement template
    REFERENCE_NUMBER = 0.70  # PR/MR number without a title
    PATTERN_FALLBACK = 0.60  # Generic tier-based sentence


# ── Impact Thresholds ────────────────────────────────────

LARGE_CHANGE_LINES = 500
MODERATE_CHANGE_LINES = 100
MULTIPLE_FILES_MIN = 3
MULTIPLE_FILES_MAX = 10
FEW_FILES_MAX = 2
MAJOR_FEATURE_FILES = 10

REFACTOR_MIN_LINES = 100
FEATURE_MIN_ADDED = 200
FEATURE_MAX_REMOVED = 50
BUGFIX_MIN_REMOVED = 50
BUGFIX_ADDED_RATIO = 0.5

STANDARD_COMMIT_SIGNAL = "Standard commit"

# ── Text Limits ──────────────────────────────────────────

MIN_HELPFUL_MESSAGE_CHARS = 10
BACKEND_MAX_CHARS = 150
SUBJECT_FALLBACK_CHARS = 60
SHORT_HASH_CHARS = 8

# ── Generative Backends ──────────────────────────────────

BACKEND_MAX_OUTPUT_TOKENS = 100
BACKEND_TEMPERATURE = 0.7
DEFAULT_OLLAMA_URL = "http://localhost:11434"

# ── Circuit Breaker Configuration ────────────────────────

CB_BACKEND_FAILURE_THRESHOLD = 3
CB_BACKEND_RECOVERY_TIMEOUT = 60

# ── Misc ─────────────────────────────────────────────────

GIT_COMMAND_TIMEOUT = 30
ERROR_TRUNCATION_CHARS = 200
USER_AGENT = "careerlog-cli"
