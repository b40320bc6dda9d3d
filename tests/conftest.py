"""
Pytest configuration and shared fixtures for tvdbmeta tests.

This module provides an in-memory remote catalog client, a controllable
clock and sample catalog payloads used across the test modules.
"""

import os

import pytest

from tests.fakes import TEST_API_KEY, FakeClock, FakeRemoteCatalogClient
from tvdbmeta.services.metadata_resolver import MetadataResolver
from tvdbmeta.services.result_cache import ResultCache
from tvdbmeta.services.session_cache import SessionCache
from tvdbmeta.services.tvdb.client_manager import TvdbClientManager
from tvdbmeta.shared.errors import AuthenticationError

# Keep a developer's real key out of the test run
os.environ.pop("TVDB_API_KEY", None)


@pytest.fixture
def fake_client() -> FakeRemoteCatalogClient:
    """Fresh in-memory catalog client."""
    return FakeRemoteCatalogClient()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def session_cache(fake_client: FakeRemoteCatalogClient, clock: FakeClock) -> SessionCache:
    return SessionCache(fake_client, TEST_API_KEY, clock=clock)


@pytest.fixture
def result_cache(session_cache: SessionCache, clock: FakeClock) -> ResultCache:
    return ResultCache(session_cache, ttl=3600, clock=clock)


@pytest.fixture
def client_manager(
    fake_client: FakeRemoteCatalogClient, result_cache: ResultCache
) -> TvdbClientManager:
    return TvdbClientManager(fake_client, result_cache)


@pytest.fixture
def resolver(client_manager: TvdbClientManager) -> MetadataResolver:
    return MetadataResolver(client_manager)


@pytest.fixture
def auth_failure() -> AuthenticationError:
    return AuthenticationError("invalid api key")


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
