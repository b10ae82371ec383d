"""Fixtures for kmplibs tests."""

from __future__ import annotations

import pytest

from tests.kmplibs.fakes import FakeServer


@pytest.fixture
def maven_server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def github_server() -> FakeServer:
    return FakeServer()
