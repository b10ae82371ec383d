"""Fetch and parse ``maven-metadata.xml``."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import structlog

from kmplibs.engines.maven.client import MavenClient
from kmplibs.engines.maven.models import VersioningManifest
from kmplibs.exceptions import MetadataError

log = structlog.get_logger("kmplibs.maven")

METADATA_FILE = "maven-metadata.xml"

_NS = "{http://maven.apache.org/METADATA/1.1.0}"


def _text(element: ET.Element | None) -> str | None:
    if element is None:
        return None
    return element.text.strip() if element.text else None


def parse_metadata(content: str, url: str = METADATA_FILE) -> VersioningManifest:
    """Parse a metadata document into a :class:`VersioningManifest`.

    ``<latest>`` falls back to ``<release>`` when a repository omits it.
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as exc:
        raise MetadataError(url, f"malformed XML: {exc}") from exc

    # Some repositories declare the default metadata namespace
    ns = _NS if root.tag == f"{_NS}metadata" else ""

    group_id = _text(root.find(f"{ns}groupId"))
    artifact_id = _text(root.find(f"{ns}artifactId"))
    versioning = root.find(f"{ns}versioning")
    if not group_id or not artifact_id:
        raise MetadataError(url, "missing groupId or artifactId")
    if versioning is None:
        raise MetadataError(url, "missing <versioning> block")

    latest = _text(versioning.find(f"{ns}latest")) or _text(versioning.find(f"{ns}release"))
    last_updated = _text(versioning.find(f"{ns}lastUpdated"))
    if not latest or not last_updated:
        raise MetadataError(url, "missing <latest> or <lastUpdated>")

    version_elements = versioning.findall(f"{ns}versions/{ns}version")
    versions = [text for text in (_text(el) for el in version_elements) if text]

    return VersioningManifest(
        group_id=group_id,
        artifact_id=artifact_id,
        latest_version=latest,
        last_updated=last_updated,
        versions=versions,
    )


async def fetch_metadata(client: MavenClient, base_url: str) -> VersioningManifest:
    """GET ``{base_url}maven-metadata.xml`` and parse it. Errors propagate."""
    url = base_url + METADATA_FILE
    log.info("maven.fetch_metadata", url=url)
    content = await client.get_text(url)
    return parse_metadata(content, url)
