"""GitHub and GitLab lookups for pull/merge-request details.

Every failure (missing token, transport error, non-2xx status,
malformed JSON, non-string fields) returns ``None``; callers fall back
to the bare reference number.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from careerlog.constants import USER_AGENT
from careerlog.references.schemas import ReferenceInfo
from careerlog.resilience.errors import describe_error

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"


def _to_reference(
    number: int, title: Any, description: Any, url: Any
) -> ReferenceInfo | None:
    """Build a ReferenceInfo from API fields; None when they are not strings."""
    try:
        return ReferenceInfo(
            number=number,
            title=title,
            description=description or None,
            url=url,
        )
    except ValidationError as exc:
        logger.warning(
            "event=reference_payload_invalid number=%d errors=%d",
            number,
            exc.error_count(),
        )
        return None


class ReferencePlatformClient:
    """Fetches PR/MR metadata over HTTP.

    Usage:
        client = ReferencePlatformClient(timeout=5.0)
        info = await client.fetch_github_pull("owner", "repo", 42, token)
        await client.close()
    """

    def __init__(
        self,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"User-Agent": USER_AGENT},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def _get_json(
        self, url: str, headers: dict[str, str]
    ) -> dict[str, Any] | None:
        try:
            response = await self._get_client().get(url, headers=headers)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning(
                "event=reference_fetch_failed url=%s %s",
                url,
                describe_error(exc),
            )
            return None
        if not isinstance(data, dict):
            return None
        return data

    async def fetch_github_pull(
        self,
        owner: str,
        repo: str,
        number: int,
        token: str | None,
    ) -> ReferenceInfo | None:
        if not token:
            return None
        data = await self._get_json(
            f"{GITHUB_API_URL}/repos/{owner}/{repo}/pulls/{number}",
            {
                "Authorization": f"token {token}",
                "Accept": "application/vnd.github.v3+json",
            },
        )
        if data is None:
            return None
        return _to_reference(
            number, data.get("title"), data.get("body"), data.get("html_url")
        )

    async def fetch_gitlab_merge_request(
        self,
        project_path: str,
        number: int,
        token: str | None,
        base_url: str = "https://gitlab.com",
    ) -> ReferenceInfo | None:
        if not token:
            return None
        project = quote(project_path, safe="")
        data = await self._get_json(
            f"{base_url.rstrip('/')}/api/v4/projects/{project}"
            f"/merge_requests/{number}",
            {"PRIVATE-TOKEN": token},
        )
        if data is None:
            return None
        return _to_reference(
            number,
            data.get("title"),
            data.get("description"),
            data.get("web_url"),
        )
