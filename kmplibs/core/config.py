"""Runtime settings — defaults, ``.env`` file, environment, then CLI overrides."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from kmplibs.exceptions import ConfigError

DEFAULT_CATALOG = Path(__file__).resolve().parent.parent / "libraries.json"
DEFAULT_OUTPUT = Path("public") / "data.json"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    """Everything one aggregation run needs."""

    github_token: str | None
    catalog_path: Path = DEFAULT_CATALOG
    output_path: Path = DEFAULT_OUTPUT
    lenient: bool = False
    http_timeout: float | None = None


def get_github_token() -> str | None:
    """Try to read a GitHub token from env or gh CLI config."""
    token = os.environ.get("GITHUB_TOKEN") or os.environ.get("GH_TOKEN")
    if token:
        return token
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode == 0 and result.stdout.strip():
            return result.stdout.strip()
    except (FileNotFoundError, subprocess.TimeoutExpired):
        pass
    return None


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


def _parse_timeout(name: str, value: str) -> float | None:
    value = value.strip()
    if not value or value.lower() == "none":
        return None
    try:
        timeout = float(value)
    except ValueError:
        raise ConfigError(f"{name} must be a number of seconds, got {value!r}") from None
    if timeout <= 0:
        raise ConfigError(f"{name} must be positive, got {value!r}")
    return timeout


def load_settings(
    *,
    token: str | None = None,
    catalog: str | Path | None = None,
    output: str | Path | None = None,
    lenient: bool | None = None,
    timeout: float | None = None,
    env_file: str | Path | None = ".env",
) -> Settings:
    """Resolve settings; explicit keyword arguments win over the environment.

    Environment variables:
        KMPLIBS_CATALOG      — catalog JSON path
        KMPLIBS_OUTPUT       — output JSON path
        KMPLIBS_LENIENT      — tolerate missing licenses / dependency versions
        KMPLIBS_HTTP_TIMEOUT — request timeout in seconds (unset: no timeout)
    """
    if env_file is not None:
        load_dotenv(env_file, override=False)

    catalog_path = Path(catalog or os.environ.get("KMPLIBS_CATALOG") or DEFAULT_CATALOG)
    output_path = Path(output or os.environ.get("KMPLIBS_OUTPUT") or DEFAULT_OUTPUT)

    if lenient is None:
        lenient = _parse_bool("KMPLIBS_LENIENT", os.environ.get("KMPLIBS_LENIENT", ""))

    if timeout is None:
        timeout = _parse_timeout(
            "KMPLIBS_HTTP_TIMEOUT", os.environ.get("KMPLIBS_HTTP_TIMEOUT", "")
        )
    elif timeout <= 0:
        raise ConfigError(f"timeout must be positive, got {timeout!r}")

    return Settings(
        github_token=token or get_github_token(),
        catalog_path=catalog_path,
        output_path=output_path,
        lenient=lenient,
        http_timeout=timeout,
    )
