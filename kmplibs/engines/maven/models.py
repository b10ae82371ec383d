"""Data models for the Maven engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

KOTLIN_GROUP = "org.jetbrains.kotlin"
KOTLIN_STDLIB_PREFIX = "kotlin-stdlib"

PLATFORM_TYPE_ATTR = "org.jetbrains.kotlin.platform.type"
NATIVE_TARGET_ATTR = "org.jetbrains.kotlin.native.target"


@dataclass
class VersioningManifest:
    """Parsed ``maven-metadata.xml`` for one artifact.

    ``versions`` holds the raw version identifiers in document order.
    """

    group_id: str
    artifact_id: str
    latest_version: str
    last_updated: str
    versions: list[str] = field(default_factory=list)

    @property
    def path(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"


# ── Gradle module metadata (*.module) ─────────────────────────────────────


class _ModuleModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Component(_ModuleModel):
    group: str | None = None
    module: str | None = None
    version: str


class GradleInfo(_ModuleModel):
    version: str


class CreatedBy(_ModuleModel):
    gradle: GradleInfo


class AvailableAt(_ModuleModel):
    url: str


class Variant(_ModuleModel):
    name: str
    attributes: dict[str, Any] = Field(default_factory=dict)
    available_at: AvailableAt | None = Field(default=None, alias="available-at")


class ModuleDescriptor(_ModuleModel):
    """Root ``.module`` file published next to each version."""

    component: Component
    created_by: CreatedBy = Field(alias="createdBy")
    variants: list[Variant] = Field(default_factory=list)


class VersionConstraint(_ModuleModel):
    requires: str | None = None


class Dependency(_ModuleModel):
    group: str
    module: str
    version: VersionConstraint | None = None

    def is_kotlin_stdlib(self) -> bool:
        return self.group == KOTLIN_GROUP and self.module.startswith(KOTLIN_STDLIB_PREFIX)


class DependencyVariant(_ModuleModel):
    name: str | None = None
    dependencies: list[Dependency] | None = None


class VariantDescriptor(_ModuleModel):
    """Platform-specific ``.module`` file a root variant points at."""

    variants: list[DependencyVariant] = Field(default_factory=list)
