"""Async client for a Maven repository serving metadata and Gradle module files."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

log = structlog.get_logger("kmplibs.maven")


class MavenClient:
    """Thin async wrapper around plain HTTP GETs against Maven repositories.

    URLs are absolute; every catalog entry carries its own repository base URL.
    """

    def __init__(
        self,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            timeout=timeout, follow_redirects=True, transport=transport
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> MavenClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def get_text(self, url: str) -> str:
        """GET *url* and return the body; raises on non-2xx statuses."""
        response = await self._client.get(url)
        log.debug("maven.get", url=url, status=response.status_code)
        response.raise_for_status()
        return response.text

    async def get_json(self, url: str) -> Any:
        """GET *url* and decode the body as JSON; raises on non-2xx statuses."""
        response = await self._client.get(url)
        log.debug("maven.get", url=url, status=response.status_code)
        response.raise_for_status()
        return response.json()
