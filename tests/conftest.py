"""
tests/conftest.py -- Shared test fixtures for SubnetAuthN tests.

This module provides:
  - adapter: a SubnetAdapter configured for 10.0.1.0/255.255.255.0
  - _patch_lifespan(): wires a test adapter into app.state, bypassing real startup
  - api_client: TestClient for API integration tests

The environment variables are cleared before any core import so a developer's
.env or shell exports cannot change get_settings() defaults under test.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from contextlib import asynccontextmanager

for _var in ("NETWORK_BASE_ADDRESS", "SUBNET_MASK", "DEBUG"):
    os.environ.pop(_var, None)

import pytest
from fastapi.testclient import TestClient

from api.main import app
from auth.adapter import CONFIG_BASE_ADDRESS, CONFIG_SUBNET_MASK, SubnetAdapter
from core.config import get_settings

TEST_BASE = "10.0.1.0"
TEST_MASK = "255.255.255.0"


def _make_adapter(base: str = TEST_BASE, mask: str = TEST_MASK) -> SubnetAdapter:
    adapter = SubnetAdapter()
    adapter.configure({CONFIG_BASE_ADDRESS: base, CONFIG_SUBNET_MASK: mask})
    return adapter


def _patch_lifespan(adapter: SubnetAdapter):
    """Return an async context manager that replaces the real lifespan.

    Tests get a known subnet regardless of environment settings.
    """

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.adapter = adapter
        yield

    return test_lifespan


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Generator[None, None, None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def adapter() -> SubnetAdapter:
    return _make_adapter()


@pytest.fixture(scope="module")
def api_client() -> Generator[TestClient, None, None]:
    """Yield a TestClient running the real app with a 10.0.1.0/24 adapter.

    The TestClient uses the real FastAPI app with a patched lifespan so
    tests hit real route handlers and middleware.
    """
    app.router.lifespan_context = _patch_lifespan(_make_adapter())

    with TestClient(app, raise_server_exceptions=True) as client:
        yield client
