"""Aggregation pipeline: catalog in, one ordered data file out."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import httpx
import structlog

from kmplibs.catalog import LibraryDescriptor, load_catalog
from kmplibs.core.config import Settings
from kmplibs.engines.github import GitHubClient, fetch_repo_info
from kmplibs.engines.maven import MavenClient, fetch_metadata, fetch_versions_info
from kmplibs.schemas import LibraryRecord, dump_records

log = structlog.get_logger("kmplibs.aggregate")


async def process_library(
    maven: MavenClient,
    github: GitHubClient,
    library: LibraryDescriptor,
    *,
    lenient: bool = False,
) -> LibraryRecord:
    """Run metadata → versions → GitHub for one library."""
    base_url = library.package_repo_base_url
    manifest = await fetch_metadata(maven, base_url)
    versions = await fetch_versions_info(maven, base_url, manifest, lenient=lenient)
    repo = await fetch_repo_info(github, library.source_repo_id, lenient=lenient)

    log.info(
        "aggregate.library",
        path=manifest.path,
        versions=len(manifest.versions),
        multiplatform=len(versions),
    )
    return LibraryRecord(
        group_id=manifest.group_id,
        artifact_id=manifest.artifact_id,
        path=manifest.path,
        latest_version=manifest.latest_version,
        last_updated=manifest.last_updated,
        versions=versions,
        github=repo,
        category=library.category,
    )


async def aggregate(
    libraries: list[LibraryDescriptor],
    maven: MavenClient,
    github: GitHubClient,
    *,
    lenient: bool = False,
) -> list[LibraryRecord]:
    """Process every library concurrently; results follow catalog order.

    The first failure cancels the remaining libraries and is re-raised.
    """
    tasks = [
        asyncio.ensure_future(process_library(maven, github, library, lenient=lenient))
        for library in libraries
    ]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


def write_output(records: list[LibraryRecord], path: Path) -> None:
    """Write records as JSON indented with a single space."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(dump_records(records), f, indent=" ", ensure_ascii=False)
        f.write("\n")


async def run(
    settings: Settings,
    *,
    maven_transport: httpx.AsyncBaseTransport | None = None,
    github_transport: httpx.AsyncBaseTransport | None = None,
) -> list[LibraryRecord]:
    """Load the catalog, aggregate, and write the data file.

    Nothing is written unless every library succeeds.
    """
    libraries = load_catalog(settings.catalog_path)
    log.info(
        "aggregate.start",
        libraries=len(libraries),
        catalog=str(settings.catalog_path),
        lenient=settings.lenient,
    )

    maven = MavenClient(timeout=settings.http_timeout, transport=maven_transport)
    github = GitHubClient(
        token=settings.github_token,
        timeout=settings.http_timeout,
        transport=github_transport,
    )
    async with maven, github:
        records = await aggregate(libraries, maven, github, lenient=settings.lenient)

    write_output(records, settings.output_path)
    log.info("aggregate.done", libraries=len(records), output=str(settings.output_path))
    return records
