"""Tests for settings resolution."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from kmplibs.core.config import DEFAULT_CATALOG, DEFAULT_OUTPUT, get_github_token, load_settings
from kmplibs.exceptions import ConfigError

_ENV_VARS = (
    "KMPLIBS_CATALOG",
    "KMPLIBS_OUTPUT",
    "KMPLIBS_LENIENT",
    "KMPLIBS_HTTP_TIMEOUT",
    "GITHUB_TOKEN",
    "GH_TOKEN",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    # setenv first so teardown also removes values a test loads from a .env file
    for name in _ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


class TestGetGithubToken:
    def test_env_github_token(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_env")
        assert get_github_token() == "ghp_env"

    def test_env_gh_token(self, monkeypatch):
        monkeypatch.setenv("GH_TOKEN", "ghp_gh")
        assert get_github_token() == "ghp_gh"

    def test_gh_cli_fallback(self):
        result = MagicMock(returncode=0, stdout="ghp_cli\n")
        with patch("kmplibs.core.config.subprocess.run", return_value=result):
            assert get_github_token() == "ghp_cli"

    def test_gh_cli_missing(self):
        with patch("kmplibs.core.config.subprocess.run", side_effect=FileNotFoundError):
            assert get_github_token() is None


class TestLoadSettings:
    def test_defaults(self):
        with patch("kmplibs.core.config.get_github_token", return_value=None):
            settings = load_settings(env_file=None)
        assert settings.catalog_path == DEFAULT_CATALOG
        assert settings.output_path == DEFAULT_OUTPUT
        assert settings.lenient is False
        assert settings.http_timeout is None
        assert settings.github_token is None

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("KMPLIBS_CATALOG", "/tmp/libs.json")
        monkeypatch.setenv("KMPLIBS_OUTPUT", "/tmp/out.json")
        monkeypatch.setenv("KMPLIBS_LENIENT", "yes")
        monkeypatch.setenv("KMPLIBS_HTTP_TIMEOUT", "12.5")
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_env")

        settings = load_settings(env_file=None)

        assert settings.catalog_path == Path("/tmp/libs.json")
        assert settings.output_path == Path("/tmp/out.json")
        assert settings.lenient is True
        assert settings.http_timeout == 12.5
        assert settings.github_token == "ghp_env"

    def test_explicit_arguments_win(self, monkeypatch):
        monkeypatch.setenv("KMPLIBS_OUTPUT", "/tmp/env.json")
        monkeypatch.setenv("KMPLIBS_LENIENT", "true")
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_env")

        settings = load_settings(
            token="ghp_cli", output="cli.json", lenient=False, timeout=3, env_file=None
        )

        assert settings.github_token == "ghp_cli"
        assert settings.output_path == Path("cli.json")
        assert settings.lenient is False
        assert settings.http_timeout == 3

    def test_dotenv_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("KMPLIBS_OUTPUT=from-dotenv.json\nGITHUB_TOKEN=ghp_dotenv\n")
        settings = load_settings(env_file=env_file)
        assert settings.output_path == Path("from-dotenv.json")
        assert settings.github_token == "ghp_dotenv"

    def test_invalid_lenient(self, monkeypatch):
        monkeypatch.setenv("KMPLIBS_LENIENT", "maybe")
        with pytest.raises(ConfigError, match="KMPLIBS_LENIENT"):
            load_settings(token="t", env_file=None)

    @pytest.mark.parametrize("value", ["abc", "0", "-1"])
    def test_invalid_timeout(self, monkeypatch, value):
        monkeypatch.setenv("KMPLIBS_HTTP_TIMEOUT", value)
        with pytest.raises(ConfigError, match="KMPLIBS_HTTP_TIMEOUT"):
            load_settings(token="t", env_file=None)

    def test_none_timeout(self, monkeypatch):
        monkeypatch.setenv("KMPLIBS_HTTP_TIMEOUT", "none")
        assert load_settings(token="t", env_file=None).http_timeout is None

    def test_invalid_explicit_timeout(self):
        with pytest.raises(ConfigError):
            load_settings(token="t", timeout=0, env_file=None)
