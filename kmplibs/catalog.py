"""Library catalog — the static list of libraries to aggregate."""

from __future__ import annotations

import json
import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from kmplibs.exceptions import CatalogError

_REPO_ID_RE = re.compile(r"^[\w.-]+/[\w.-]+$")


class LibraryDescriptor(BaseModel):
    """One catalog entry: where to find the artifact and its GitHub repo."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    package_repo_base_url: str = Field(alias="maven")
    source_repo_id: str = Field(alias="github")
    category: str

    @field_validator("package_repo_base_url", "source_repo_id", "category", mode="before")
    @classmethod
    def _strip_whitespace(cls, v: str) -> str:
        return v.strip() if isinstance(v, str) else v

    @field_validator("package_repo_base_url")
    @classmethod
    def _ensure_trailing_slash(cls, v: str) -> str:
        if not v.startswith(("https://", "http://")):
            raise ValueError(f"expected an http(s) URL, got {v!r}")
        return v if v.endswith("/") else v + "/"

    @field_validator("source_repo_id")
    @classmethod
    def _check_repo_id(cls, v: str) -> str:
        if not _REPO_ID_RE.match(v):
            raise ValueError(f"expected 'owner/repo', got {v!r}")
        return v


_CATALOG_ADAPTER = TypeAdapter(list[LibraryDescriptor])


def parse_catalog(entries: object) -> list[LibraryDescriptor]:
    """Validate decoded catalog JSON, keeping entry order."""
    try:
        return _CATALOG_ADAPTER.validate_python(entries)
    except ValidationError as exc:
        raise CatalogError(f"invalid catalog: {exc}") from exc


def load_catalog(path: Path) -> list[LibraryDescriptor]:
    """Read and validate the catalog JSON file at *path*."""
    try:
        with open(path, encoding="utf-8") as f:
            entries = json.load(f)
    except OSError as exc:
        raise CatalogError(f"cannot read catalog {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise CatalogError(f"catalog {path} is not valid JSON: {exc}") from exc
    return parse_catalog(entries)
