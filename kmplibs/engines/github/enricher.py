"""Repository statistics from GitHub for one catalog entry."""

from __future__ import annotations

from typing import Any

import structlog

from kmplibs.engines.github.github_client import GitHubClient
from kmplibs.exceptions import MissingLicenseError
from kmplibs.schemas import RepoInfo

log = structlog.get_logger("kmplibs.github")


def to_repo_info(repo_id: str, data: dict[str, Any], *, lenient: bool = False) -> RepoInfo:
    """Map a GitHub repository payload onto :class:`RepoInfo`.

    ``watchers_count`` comes from ``subscribers_count``; GitHub's own
    ``watchers_count`` mirrors the star count.
    """
    license_info = data.get("license")
    if license_info is None:
        if not lenient:
            raise MissingLicenseError(repo_id)
        license_name = None
    else:
        license_name = license_info.get("name")

    return RepoInfo(
        name=data["name"],
        full_name=data["full_name"],
        html_url=data["html_url"],
        description=data.get("description"),
        stars_count=data["stargazers_count"],
        watchers_count=data["subscribers_count"],
        issues_count=data["open_issues_count"],
        forks_count=data["forks_count"],
        license=license_name,
        topics=list(data.get("topics") or []),
    )


async def fetch_repo_info(
    client: GitHubClient, repo_id: str, *, lenient: bool = False
) -> RepoInfo:
    """Fetch ``owner/repo`` from GitHub. Every failure propagates."""
    log.info("github.fetch_repo", repo=repo_id)
    data = await client.get_repo(repo_id)
    return to_repo_info(repo_id, data, lenient=lenient)
