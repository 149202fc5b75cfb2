"""
Shared fixtures.

Every test gets a fresh application (its own registry and rate limiter)
driven by a FakeClock, so expiry and rate-limit windows can be crossed
without sleeping.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from shortener.core.clock import Clock
from shortener.core.setting import RateLimitSettings, Settings
from shortener.main import create_app
from shortener.services.url_registry import UrlRegistry

START_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
BASE_URL = "http://localhost:8080/"


class FakeClock(Clock):
    """Clock that only moves when told to."""

    def __init__(self, start: datetime = START_TIME):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        BASE_URL=BASE_URL,
        SHORT_CODE_LENGTH=6,
        DEFAULT_EXPIRATION_HOURS=24,
        MAX_URL_LENGTH=2048,
        rate_limit=RateLimitSettings(max_requests=100, window_millis=60_000),
    )


@pytest.fixture
def registry(clock: FakeClock) -> UrlRegistry:
    return UrlRegistry(base_url=BASE_URL, clock=clock)


@pytest.fixture
def app(settings: Settings, clock: FakeClock):
    return create_app(settings=settings, clock=clock)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
