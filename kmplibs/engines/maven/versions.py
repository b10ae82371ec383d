"""Per-version detail fetching for one artifact."""

from __future__ import annotations

import asyncio

import httpx
import structlog

from kmplibs.engines.maven.client import MavenClient
from kmplibs.engines.maven.compatibility import resolve_kotlin_version
from kmplibs.engines.maven.models import (
    NATIVE_TARGET_ATTR,
    PLATFORM_TYPE_ATTR,
    ModuleDescriptor,
    VersioningManifest,
)
from kmplibs.schemas import TargetInfo, VersionInfo

log = structlog.get_logger("kmplibs.maven")


def module_url(base_url: str, artifact_id: str, version: str) -> str:
    return f"{base_url}{version}/{artifact_id}-{version}.module"


def build_targets(module: ModuleDescriptor) -> dict[str, TargetInfo]:
    """Map each variant name to its platform type and native target."""
    targets: dict[str, TargetInfo] = {}
    for variant in module.variants:
        platform = variant.attributes.get(PLATFORM_TYPE_ATTR)
        target = variant.attributes.get(NATIVE_TARGET_ATTR)
        targets[variant.name] = TargetInfo(
            platform_type=str(platform) if platform is not None else None,
            native_target=str(target) if target is not None else None,
        )
    return targets


async def fetch_version_info(
    client: MavenClient,
    base_url: str,
    manifest: VersioningManifest,
    version: str,
    *,
    lenient: bool = False,
) -> VersionInfo:
    """Fetch the ``.module`` file of *version* and resolve its details.

    Versions without a usable module descriptor come back as the
    ``is_multiplatform=False`` sentinel instead of raising.
    """
    url = module_url(base_url, manifest.artifact_id, version)
    log.info("maven.fetch_version", url=url, version=version)

    try:
        module = ModuleDescriptor.model_validate(await client.get_json(url))
        kotlin_version = await resolve_kotlin_version(client, base_url, module, lenient=lenient)
    except (httpx.HTTPError, ValueError) as exc:
        log.debug(
            "maven.fetch_version.not_multiplatform",
            url=url,
            error=f"{type(exc).__name__}: {exc}",
        )
        return VersionInfo.not_multiplatform(version)

    return VersionInfo(
        version=version,
        is_multiplatform=True,
        build_tool_version=module.created_by.gradle.version,
        runtime_version=kotlin_version,
        targets=build_targets(module),
    )


async def fetch_versions_info(
    client: MavenClient,
    base_url: str,
    manifest: VersioningManifest,
    *,
    lenient: bool = False,
) -> list[VersionInfo]:
    """Fetch every listed version concurrently; keep only multiplatform ones.

    Result order follows ``manifest.versions``, not completion order.
    """
    log.info("maven.fetch_versions", base_url=base_url, count=len(manifest.versions))
    results = await asyncio.gather(
        *(
            fetch_version_info(client, base_url, manifest, version, lenient=lenient)
            for version in manifest.versions
        )
    )
    return [info for info in results if info.is_multiplatform]
