"""Tests for per-version module descriptor fetching."""

from __future__ import annotations

import pytest

from kmplibs.engines.maven import (
    MavenClient,
    ModuleDescriptor,
    fetch_version_info,
    fetch_versions_info,
)
from kmplibs.engines.maven.models import VersioningManifest
from kmplibs.engines.maven.versions import build_targets, module_url
from kmplibs.exceptions import CompatibilityError
from tests.kmplibs.fakes import MAVEN_BASE, module_json, platform_module, root_variant, stdlib


def _manifest(*versions: str) -> VersioningManifest:
    return VersioningManifest(
        group_id="dev.icerock.moko",
        artifact_id="resources",
        latest_version=versions[-1],
        last_updated="20201116093012",
        versions=list(versions),
    )


def _publish(server, version: str, kotlin: str | None = "1.4.0", delay: float = 0.0) -> None:
    """Publish a two-variant multiplatform release of *version*."""
    server.add_json(
        module_url(MAVEN_BASE, "resources", version),
        module_json(
            version,
            [
                root_variant("iosArm64ApiElements", f"ios-{version}.module", "native", "ios_arm64"),
                root_variant(
                    "androidReleaseApiElements", f"android-{version}.module", "androidJvm"
                ),
            ],
        ),
        delay=delay,
    )
    server.add_json(
        f"{MAVEN_BASE}{version}/ios-{version}.module",
        platform_module([stdlib(kotlin)] if kotlin else None),
    )
    server.add_json(f"{MAVEN_BASE}{version}/android-{version}.module", platform_module(None))


class TestModuleUrl:
    def test_layout(self):
        assert module_url("https://r/a/b/", "b", "1.0") == "https://r/a/b/1.0/b-1.0.module"


class TestBuildTargets:
    def test_platform_and_native_target(self):
        module = ModuleDescriptor.model_validate(
            module_json(
                "1.0",
                [
                    root_variant("iosX64ApiElements", "x.module", "native", "ios_x64"),
                    root_variant("jvmApiElements", "j.module", "jvm"),
                    {"name": "metadataApiElements", "attributes": {}},
                ],
            )
        )
        targets = build_targets(module)

        assert list(targets) == ["iosX64ApiElements", "jvmApiElements", "metadataApiElements"]
        assert targets["iosX64ApiElements"].platform_type == "native"
        assert targets["iosX64ApiElements"].native_target == "ios_x64"
        assert targets["jvmApiElements"].platform_type == "jvm"
        assert targets["jvmApiElements"].native_target is None
        assert targets["metadataApiElements"].platform_type is None


class TestFetchVersionInfo:
    @pytest.mark.anyio
    async def test_multiplatform_version(self, maven_server):
        _publish(maven_server, "1.1", kotlin="1.4.0")
        async with MavenClient(transport=maven_server.transport) as client:
            info = await fetch_version_info(client, MAVEN_BASE, _manifest("1.1"), "1.1")

        assert info.is_multiplatform is True
        assert info.version == "1.1"
        assert info.build_tool_version == "6.7.1"
        assert info.runtime_version == "1.4.0"
        assert set(info.targets) == {"iosArm64ApiElements", "androidReleaseApiElements"}
        assert info.targets["androidReleaseApiElements"].platform_type == "androidJvm"

    @pytest.mark.anyio
    async def test_missing_descriptor_is_sentinel(self, maven_server):
        async with MavenClient(transport=maven_server.transport) as client:
            info = await fetch_version_info(client, MAVEN_BASE, _manifest("0.9"), "0.9")

        assert info.is_multiplatform is False
        assert info.build_tool_version is None
        assert info.runtime_version is None
        assert info.targets is None

    @pytest.mark.anyio
    async def test_malformed_descriptor_is_sentinel(self, maven_server):
        maven_server.add_json(module_url(MAVEN_BASE, "resources", "1.0"), {"formatVersion": "1.1"})
        async with MavenClient(transport=maven_server.transport) as client:
            info = await fetch_version_info(client, MAVEN_BASE, _manifest("1.0"), "1.0")
        assert info.is_multiplatform is False

    @pytest.mark.anyio
    async def test_non_json_descriptor_is_sentinel(self, maven_server):
        maven_server.add_text(module_url(MAVEN_BASE, "resources", "1.0"), "<html>oops</html>")
        async with MavenClient(transport=maven_server.transport) as client:
            info = await fetch_version_info(client, MAVEN_BASE, _manifest("1.0"), "1.0")
        assert info.is_multiplatform is False

    @pytest.mark.anyio
    async def test_unresolved_kotlin_version_still_multiplatform(self, maven_server):
        _publish(maven_server, "1.2", kotlin=None)
        async with MavenClient(transport=maven_server.transport) as client:
            info = await fetch_version_info(client, MAVEN_BASE, _manifest("1.2"), "1.2")

        assert info.is_multiplatform is True
        assert info.runtime_version is None

    @pytest.mark.anyio
    async def test_variant_fetch_failure_is_sentinel(self, maven_server):
        _publish(maven_server, "1.3")
        del maven_server.routes[f"{MAVEN_BASE}1.3/ios-1.3.module"]
        async with MavenClient(transport=maven_server.transport) as client:
            info = await fetch_version_info(client, MAVEN_BASE, _manifest("1.3"), "1.3")
        assert info.is_multiplatform is False

    @pytest.mark.anyio
    async def test_strict_compatibility_error_propagates(self, maven_server):
        _publish(maven_server, "1.4")
        maven_server.add_json(f"{MAVEN_BASE}1.4/ios-1.4.module", platform_module([stdlib(None)]))
        async with MavenClient(transport=maven_server.transport) as client:
            with pytest.raises(CompatibilityError):
                await fetch_version_info(client, MAVEN_BASE, _manifest("1.4"), "1.4")


class TestFetchVersionsInfo:
    @pytest.mark.anyio
    async def test_filters_non_multiplatform(self, maven_server):
        _publish(maven_server, "1.1", kotlin="1.4.0")
        async with MavenClient(transport=maven_server.transport) as client:
            infos = await fetch_versions_info(client, MAVEN_BASE, _manifest("1.0", "1.1"))

        assert [i.version for i in infos] == ["1.1"]
        assert all(i.is_multiplatform for i in infos)
        assert infos[0].runtime_version == "1.4.0"

    @pytest.mark.anyio
    async def test_order_follows_manifest_not_completion(self, maven_server):
        _publish(maven_server, "1.0", delay=0.05)
        _publish(maven_server, "1.1", delay=0.02)
        _publish(maven_server, "1.2")
        async with MavenClient(transport=maven_server.transport) as client:
            infos = await fetch_versions_info(client, MAVEN_BASE, _manifest("1.0", "1.1", "1.2"))

        assert [i.version for i in infos] == ["1.0", "1.1", "1.2"]

    @pytest.mark.anyio
    async def test_all_failures_give_empty_list(self, maven_server):
        async with MavenClient(transport=maven_server.transport) as client:
            infos = await fetch_versions_info(client, MAVEN_BASE, _manifest("1.0", "1.1"))
        assert infos == []
