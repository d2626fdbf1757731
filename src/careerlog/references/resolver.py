"""Detect and resolve pull/merge-request references in commit messages."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeAlias

from careerlog.config import Settings
from careerlog.constants import MIN_HELPFUL_MESSAGE_CHARS, Platform
from careerlog.ingestion.schemas import CommitRecord
from careerlog.patterns import (
    GENERIC_MESSAGE_PATTERNS,
    GENERIC_REMOTE_RE,
    GITHUB_REMOTE_RE,
    GITLAB_REMOTE_RE,
    REFERENCE_PATTERNS,
)
from careerlog.references.clients import ReferencePlatformClient
from careerlog.references.schemas import ReferenceInfo, RepoPlatform

logger = logging.getLogger(__name__)

RemoteUrlProvider: TypeAlias = Callable[[], Awaitable[str | None]]


def extract_reference_number(
    subject: str, body: str | None = None
) -> int | None:
    """First reference number found, trying patterns in table order."""
    combined = f"{subject} {body or ''}"
    for pattern in REFERENCE_PATTERNS:
        match = pattern.search(combined)
        if match and match.group(1):
            return int(match.group(1))
    return None


def is_message_helpful(message: str) -> bool:
    """False for short or generic commit subjects ("wip", "fix", ...)."""
    trimmed = message.strip()
    if len(trimmed) < MIN_HELPFUL_MESSAGE_CHARS:
        return False
    return not any(p.search(trimmed) for p in GENERIC_MESSAGE_PATTERNS)


def parse_remote_url(remote_url: str | None) -> RepoPlatform:
    """Classify a remote URL as GitHub, GitLab (incl. self-hosted) or unknown."""
    if not remote_url:
        return RepoPlatform()
    url = remote_url.strip()

    m = GITHUB_REMOTE_RE.search(url)
    if m:
        return RepoPlatform(
            platform=Platform.GITHUB,
            owner=m.group(1),
            repo=m.group(2).removesuffix(".git"),
        )

    m = GITLAB_REMOTE_RE.search(url)
    if m:
        return RepoPlatform(
            platform=Platform.GITLAB,
            project_path=m.group(1).removesuffix(".git"),
        )

    if "github.com" not in url.lower():
        m = GENERIC_REMOTE_RE.match(url)
        if m:
            return RepoPlatform(
                platform=Platform.GITLAB,
                project_path=m.group("path").removesuffix(".git"),
            )

    return RepoPlatform()


class ResolutionCache:
    """Resolved references keyed by commit hash. Each key is written once."""

    def __init__(self) -> None:
        self._entries: dict[str, ReferenceInfo] = {}

    def __contains__(self, commit_hash: object) -> bool:
        return commit_hash in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, commit_hash: str) -> ReferenceInfo | None:
        return self._entries.get(commit_hash)

    def put(self, commit_hash: str, info: ReferenceInfo) -> ReferenceInfo:
        """Store *info* unless the hash is cached; return the cached value."""
        return self._entries.setdefault(commit_hash, info)


class ReferenceResolver:
    """Decides when a PR/MR reference replaces the commit message, and
    resolves it through the platform API when a token is configured.

    Resolution never raises: without a token, or on any fetch failure,
    the bare reference number is returned.
    """

    def __init__(
        self,
        settings: Settings,
        remote_url_provider: RemoteUrlProvider | None = None,
        client: ReferencePlatformClient | None = None,
        cache: ResolutionCache | None = None,
    ) -> None:
        self._settings = settings
        self._remote_url_provider = remote_url_provider
        self._client = client or ReferencePlatformClient(
            timeout=settings.request_timeout_seconds
        )
        self.cache = cache or ResolutionCache()
        self._platform: RepoPlatform | None = None

    @property
    def enabled(self) -> bool:
        return not self._settings.skip_references

    async def close(self) -> None:
        await self._client.close()

    def should_use_reference(self, commit: CommitRecord) -> bool:
        """Prefer the reference only for unhelpful messages that carry one."""
        return (
            self.enabled
            and not is_message_helpful(commit.subject)
            and extract_reference_number(commit.subject, commit.body)
            is not None
        )

    async def detect_platform(self) -> RepoPlatform:
        """Platform of the origin remote; looked up once per resolver."""
        if self._platform is None:
            remote_url: str | None = None
            if self._remote_url_provider is not None:
                remote_url = await self._remote_url_provider()
            self._platform = parse_remote_url(remote_url)
            logger.debug(
                "event=platform_detected platform=%s",
                self._platform.platform,
            )
        return self._platform

    async def get_reference_info(
        self, commit: CommitRecord
    ) -> ReferenceInfo | None:
        if not self.enabled:
            return None

        cached = self.cache.get(commit.hash)
        if cached is not None:
            return cached

        number = extract_reference_number(commit.subject, commit.body)
        if number is None:
            return None

        info = await self._fetch(number)
        if info is None or not info.title:
            info = ReferenceInfo(number=number)
        return self.cache.put(commit.hash, info)

    async def _fetch(self, number: int) -> ReferenceInfo | None:
        """Platform lookup; ``None`` when no token or the call fails."""
        s = self._settings
        if not (s.github_token or s.gitlab_token):
            return None

        repo = await self.detect_platform()
        if (
            repo.platform == Platform.GITHUB
            and repo.owner
            and repo.repo
            and s.github_token
        ):
            return await self._client.fetch_github_pull(
                repo.owner, repo.repo, number, s.github_token
            )
        if (
            repo.platform == Platform.GITLAB
            and repo.project_path
            and s.gitlab_token
        ):
            return await self._client.fetch_gitlab_merge_request(
                repo.project_path, number, s.gitlab_token, s.gitlab_url
            )
        return None
