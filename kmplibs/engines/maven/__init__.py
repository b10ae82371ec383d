"""Maven engine — artifact metadata, module descriptors and Kotlin compatibility."""

from kmplibs.engines.maven.client import MavenClient
from kmplibs.engines.maven.compatibility import find_stdlib_version, resolve_kotlin_version
from kmplibs.engines.maven.metadata import fetch_metadata, parse_metadata
from kmplibs.engines.maven.models import ModuleDescriptor, VariantDescriptor, VersioningManifest
from kmplibs.engines.maven.versions import fetch_version_info, fetch_versions_info

__all__ = [
    "MavenClient",
    "ModuleDescriptor",
    "VariantDescriptor",
    "VersioningManifest",
    "fetch_metadata",
    "fetch_version_info",
    "fetch_versions_info",
    "find_stdlib_version",
    "parse_metadata",
    "resolve_kotlin_version",
]
