"""Async GitHub API client for repository lookups."""

from __future__ import annotations

import time
from typing import Any

import httpx
import structlog

log = structlog.get_logger("kmplibs.github")

GITHUB_API = "https://api.github.com"
# The mercy preview media type makes the repository endpoint include ``topics``.
TOPICS_MEDIA_TYPE = "application/vnd.github.mercy-preview+json"


class RateLimitError(Exception):
    """Raised when the GitHub rate limit is exhausted."""

    def __init__(self, retry_after: int) -> None:
        self.retry_after = retry_after
        super().__init__(f"rate limit exceeded, retry after {retry_after}s")


class GitHubClient:
    """Thin async wrapper around the GitHub REST API.

    Requests are issued once: no retries and no backoff.
    """

    def __init__(
        self,
        token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers: dict[str, str] = {"Accept": TOPICS_MEDIA_TYPE}
        if token:
            headers["Authorization"] = f"token {token}"
        self._client = httpx.AsyncClient(
            base_url=GITHUB_API,
            headers=headers,
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    # ── lifecycle ──────────────────────────────────────────────────────────

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> GitHubClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # ── public ─────────────────────────────────────────────────────────────

    async def get(self, path: str) -> Any:
        """Single-resource GET, returns parsed JSON.

        Renamed repositories answer 301; redirects are followed.
        """
        response = await self._client.get(path)
        if response.status_code == 403 and self._is_rate_limited(response):
            wait = self._get_rate_limit_wait(response)
            log.warning("github.rate_limit", path=path, wait_seconds=wait)
            raise RateLimitError(wait)
        response.raise_for_status()
        return response.json()

    async def get_repo(self, repo_id: str) -> dict[str, Any]:
        """GET /repos/{owner}/{repo}."""
        return await self.get(f"/repos/{repo_id}")

    # ── internal ───────────────────────────────────────────────────────────

    @staticmethod
    def _is_rate_limited(response: httpx.Response) -> bool:
        """Check if a 403 response is due to rate limiting."""
        remaining = response.headers.get("X-RateLimit-Remaining")
        if remaining is not None:
            try:
                return int(remaining) == 0
            except (ValueError, TypeError):
                pass
        # GitHub also uses Retry-After header for abuse rate limits
        return "Retry-After" in response.headers

    @staticmethod
    def _get_rate_limit_wait(response: httpx.Response) -> int:
        """Calculate how long a caller would have to wait before retrying."""
        retry_after = GitHubClient._parse_header_int(response.headers.get("Retry-After"))
        if retry_after is not None:
            return max(retry_after, 1)
        reset_ts = GitHubClient._parse_header_int(response.headers.get("X-RateLimit-Reset"))
        if reset_ts is not None:
            return max(reset_ts - int(time.time()), 1)
        return 60

    @staticmethod
    def _parse_header_int(value: str | None) -> int | None:
        """Safely parse an integer header value."""
        if value is None:
            return None
        try:
            return int(value)
        except (ValueError, TypeError):
            return None
