"""
Test configuration and fixtures for the ShortLink service.
This centralizes all test setup, making individual tests clean.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from main import app
from shortlink_app.dependencies import get_logging_service, get_redirect_resolver, get_url_registry
from shortlink_app.services.logging_service import LoggingService
from shortlink_app.services.redirect_resolver import RedirectResolver
from shortlink_app.services.url_registry import URLRegistry
from shortlink_app.storage.strategies import InMemoryStorage

BASE_URL = "http://testserver"


class FakeClock:
    """Controllable replacement for the registry clock"""

    def __init__(self, start: datetime = None):
        self.now = start or datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture(scope="function")
def clock():
    return FakeClock()


@pytest.fixture(scope="function")
def storage():
    """Fresh in-memory storage for each test"""
    return InMemoryStorage()


@pytest.fixture(scope="function")
def logging_service(storage):
    return LoggingService(storage)


@pytest.fixture(scope="function")
def registry(storage, logging_service, clock):
    return URLRegistry(storage, logging_service, base_url=BASE_URL, clock=clock)


@pytest.fixture(scope="function")
def resolver(registry, logging_service):
    """Resolver without the artificial redirect delay"""
    return RedirectResolver(registry, logging_service, redirect_delay=0)


@pytest.fixture(scope="function")
def client(registry, logging_service, resolver):
    """
    Create a test client with the service dependencies overridden.
    This is the main fixture that API tests will use.
    """
    app.dependency_overrides[get_url_registry] = lambda: registry
    app.dependency_overrides[get_logging_service] = lambda: logging_service
    app.dependency_overrides[get_redirect_resolver] = lambda: resolver

    with TestClient(app) as test_client:
        yield test_client

    # Clean up overrides
    app.dependency_overrides.clear()
