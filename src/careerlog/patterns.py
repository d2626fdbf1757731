"""Static pattern tables used by classification, resolution and synthesis.

Built once at import time and never mutated. Ordered tables are
tuples; the order is significant wherever a "first match wins" rule
applies.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass


def _compile(*patterns: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


# ── Impact classification ────────────────────────────────

# Paths whose modification makes a commit high-impact
CRITICAL_FILE_PATTERNS = _compile(
    r"package\.json$",
    r"package-lock\.json$",
    r"yarn\.lock$",
    r"dockerfile",
    r"docker-compose",
    r"\.dockerignore",
    r"migrations?",
    r"schema",
    r"auth",
    r"security",
    r"api",
    r"\.github/workflows",
    r"\.env",
    r"config",
    r"\.config\.",
)

# Category → path patterns; a path lands in the first matching category
FILE_TYPE_PATTERNS: tuple[tuple[str, tuple[re.Pattern[str], ...]], ...] = (
    ("TypeScript", _compile(r"\.tsx?$", r"tsconfig")),
    ("JavaScript", _compile(r"\.jsx?$", r"\.mjs$", r"\.cjs$")),
    ("Python", _compile(r"\.py$", r"requirements\.txt", r"setup\.py")),
    ("Java", _compile(r"\.java$", r"\.class$")),
    ("Go", _compile(r"\.go$", r"go\.mod")),
    ("Rust", _compile(r"\.rs$", r"Cargo\.toml")),
    ("Docker", _compile(r"dockerfile", r"docker-compose", r"\.dockerignore")),
    (
        "Tests",
        _compile(
            r"\.test\.", r"\.spec\.", r"__tests__", r"test/", r"tests/"
        ),
    ),
    (
        "Config",
        _compile(r"\.config\.", r"\.env", r"\.json$", r"\.yaml$", r"\.yml$"),
    ),
    ("CSS", _compile(r"\.css$", r"\.scss$", r"\.sass$", r"\.less$")),
    ("HTML", _compile(r"\.html$", r"\.htm$")),
    ("Markdown", _compile(r"\.md$", r"\.markdown$")),
    ("SQL", _compile(r"\.sql$")),
    ("Shell", _compile(r"\.sh$", r"\.bash$", r"\.zsh$")),
)

CRITICAL_KEYWORDS = (
    "performance",
    "optimize",
    "cache",
    "security",
    "vulnerability",
    "auth",
    "encryption",
    "critical",
    "urgent",
    "hotfix",
    "breach",
    "exploit",
    "sql injection",
    "xss",
    "csrf",
)

PERFORMANCE_KEYWORDS = (
    "performance",
    "optimize",
    "optimization",
    "cache",
    "caching",
    "speed",
    "latency",
    "throughput",
    "efficiency",
)

# ── Reference resolution ─────────────────────────────────

# Explicit close-keywords first so they win over a bare "#N"
REFERENCE_PATTERNS = _compile(
    r"(?:fixes?|closes?|resolves?|merges?)\s+(?:#|PR\s*#?)(\d+)",
    r"(?:#|PR\s*#?)(\d+)",
    r"PR[:\s]+(\d+)",
    r"pull[-\s]?request[:\s]+#?(\d+)",
)

GENERIC_MESSAGE_PATTERNS = _compile(
    r"^update$",
    r"^fix$",
    r"^changes?$",
    r"^wip$",
    r"^work in progress$",
    r"^merge$",
    r"^update \.\.\.$",
    r"^bump$",
    r"^merge branch",
    r"^merge pull request",
)

GITHUB_REMOTE_RE = re.compile(
    r"github\.com[/:]([^/]+)/([^/]+?)(?:\.git)?/?$", re.IGNORECASE
)
GITLAB_REMOTE_RE = re.compile(
    r"gitlab\.com[/:](.+?)(?:\.git)?/?$", re.IGNORECASE
)
# Self-hosted instances: URL-style (port allowed) or scp-style remote
GENERIC_REMOTE_RE = re.compile(
    r"(?:(?:ssh|https?)://(?:[^@/]+@)?[^:/]+(?::\d+)?/"
    r"|git@[^:/]+:)"
    r"(?P<path>.+?)(?:\.git)?/?$",
    re.IGNORECASE,
)

# ── Achievement synthesis ────────────────────────────────

# Category → patterns; dict order is the tie-break order
COMPONENT_PATTERNS: dict[str, tuple[re.Pattern[str], ...]] = {
    "auth": _compile(
        r"auth", r"authentication", r"login", r"session", r"jwt",
        r"oauth", r"token",
    ),
    "API": _compile(r"api", r"endpoint", r"route", r"controller", r"handler"),
    "database": _compile(
        r"database", r"db", r"sql", r"query", r"migration", r"schema",
        r"model",
    ),
    "UI": _compile(
        r"ui", r"component", r"view", r"page", r"screen", r"\.tsx$",
        r"\.jsx$", r"\.vue$",
    ),
    "frontend": _compile(
        r"frontend", r"client", r"\.html$", r"\.css$", r"\.scss$"
    ),
    "backend": _compile(
        r"backend", r"server", r"service", r"\.py$", r"\.java$"
    ),
    "testing": _compile(
        r"test", r"spec", r"\.test\.", r"\.spec\.", r"__tests__"
    ),
    "security": _compile(
        r"security", r"encryption", r"vulnerability", r"sanitize",
        r"validate",
    ),
    "performance": _compile(
        r"performance", r"optimize", r"cache", r"speed", r"latency"
    ),
    "config": _compile(r"config", r"\.env", r"\.yaml$", r"\.yml$", r"\.json$"),
    "infrastructure": _compile(
        r"docker", r"kubernetes", r"deploy", r"ci/cd",
        r"\.github/workflows",
    ),
}

# Extension fallbacks when no component scores, checked in order
COMPONENT_EXTENSION_FALLBACKS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("UI", re.compile(r"\.(tsx|jsx|vue)$", re.IGNORECASE)),
    ("Backend", re.compile(r"\.(py|java|go|rs)$", re.IGNORECASE)),
    ("Database", re.compile(r"\.(sql|migration)", re.IGNORECASE)),
)
DEFAULT_COMPONENT = "System"

# (gerund, keywords): first keyword hit wins
ACTION_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "optimizing",
        (
            "optimize", "optimization", "performance", "cache", "speed",
            "latency", "efficiency",
        ),
    ),
    (
        "implementing",
        ("implement", "add", "create", "build", "introduce", "feature"),
    ),
    ("fixing", ("fix", "resolve", "solve", "bug", "error", "issue", "patch")),
    ("enhancing", ("enhance", "improve", "upgrade", "refine", "polish")),
    ("refactoring", ("refactor", "restructure", "reorganize", "cleanup")),
    ("testing", ("test", "testing", "coverage", "spec", "assert")),
    (
        "securing",
        ("secure", "security", "encrypt", "sanitize", "validate", "auth"),
    ),
)


@dataclass(frozen=True)
class AchievementTemplate:
    """Keyword set plus a sentence builder ``(component, action, files)``."""

    name: str
    keywords: tuple[str, ...]
    render: Callable[[str, str, int], str]


ACHIEVEMENT_TEMPLATES: tuple[AchievementTemplate, ...] = (
    AchievementTemplate(
        name="performance",
        keywords=("performance", "optimize", "cache", "speed", "latency"),
        render=lambda component, action, _files: (
            f"Optimized {component} by {action}"
        ),
    ),
    AchievementTemplate(
        name="security",
        keywords=("security", "encrypt", "vulnerability", "auth", "sanitize"),
        render=lambda component, _action, _files: (
            f"Enhanced security in {component}"
        ),
    ),
    AchievementTemplate(
        name="feature",
        keywords=("implement", "add", "create", "feature", "introduce"),
        render=lambda component, _action, files: (
            f"Implemented {component} feature affecting {files} modules"
        ),
    ),
    AchievementTemplate(
        name="bugfix",
        keywords=("fix", "resolve", "bug", "error", "issue"),
        render=lambda component, _action, _files: f"Fixed {component} bug",
    ),
    AchievementTemplate(
        name="testing",
        keywords=("test", "testing", "coverage", "spec"),
        render=lambda _component, action, _files: (
            f"Improved code reliability with {action}"
        ),
    ),
)
