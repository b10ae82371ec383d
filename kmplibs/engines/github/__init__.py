"""GitHub engine — repository statistics for catalog entries."""

from kmplibs.engines.github.enricher import fetch_repo_info, to_repo_info
from kmplibs.engines.github.github_client import GitHubClient, RateLimitError

__all__ = ["GitHubClient", "RateLimitError", "fetch_repo_info", "to_repo_info"]
