"""Published record schemas, the shape of the data file the website reads."""

from __future__ import annotations

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)


def _drop_none(handler: SerializerFunctionWrapHandler, model: BaseModel) -> dict[str, Any]:
    return {key: value for key, value in handler(model).items() if value is not None}


class TargetInfo(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    platform_type: str | None = Field(default=None, alias="platform")
    native_target: str | None = Field(default=None, alias="target")

    @model_serializer(mode="wrap")
    def _serialize(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        return _drop_none(handler, self)


class VersionInfo(BaseModel):
    """Resolved details for one published version.

    A version whose module descriptor could not be fetched is kept as the
    sentinel ``VersionInfo(version=..., is_multiplatform=False)`` with every
    other field unset; unset fields are omitted when serialized.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version: str
    is_multiplatform: bool = Field(alias="mpp")
    build_tool_version: str | None = Field(default=None, alias="gradle")
    runtime_version: str | None = Field(default=None, alias="kotlin")
    targets: dict[str, TargetInfo] | None = None

    @classmethod
    def not_multiplatform(cls, version: str) -> VersionInfo:
        return cls(version=version, is_multiplatform=False)

    @model_serializer(mode="wrap")
    def _serialize(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        return _drop_none(handler, self)


class RepoInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    full_name: str
    html_url: str
    description: str | None
    stars_count: int
    watchers_count: int
    issues_count: int
    forks_count: int
    license: str | None
    topics: list[str]


class LibraryRecord(BaseModel):
    """One library in the published data file."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    group_id: str = Field(alias="groupId")
    artifact_id: str = Field(alias="artifactId")
    path: str
    latest_version: str = Field(alias="latestVersion")
    last_updated: str = Field(alias="lastUpdated")
    versions: list[VersionInfo]
    github: RepoInfo
    category: str

    @model_validator(mode="after")
    def _check_invariants(self) -> LibraryRecord:
        expected_path = f"{self.group_id}:{self.artifact_id}"
        if self.path != expected_path:
            raise ValueError(f"path {self.path!r} does not match {expected_path!r}")
        if any(not v.is_multiplatform for v in self.versions):
            raise ValueError("versions may only contain multiplatform entries")
        return self


def dump_records(records: list[LibraryRecord]) -> list[dict[str, Any]]:
    """Convert records to JSON-ready dicts using the published key names."""
    return [record.model_dump(mode="json", by_alias=True) for record in records]
