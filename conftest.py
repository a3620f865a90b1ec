import pytest
from httpx import ASGITransport, AsyncClient

from shipquote.main import app
from shipquote.api.pricing import get_quote_engine
from shipquote.core.config import settings
from shipquote.core.pricing_config import DEFAULT_PRICING_CONFIG
from shipquote.services.pricing import QuoteEngine


class FakeRedis:
    """In-memory stand-in for the async Redis client used by the quote cache."""

    def __init__(self, fail: bool = False):
        self.store = {}
        self.ttls = {}
        self.fail = fail

    async def get(self, key):
        if self.fail:
            raise ConnectionError("redis down")
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        if self.fail:
            raise ConnectionError("redis down")
        self.store[key] = value
        self.ttls[key] = ex


@pytest.fixture(autouse=True)
def no_redis(monkeypatch):
    """Run every test without a configured Redis unless it opts in."""
    monkeypatch.setattr(settings, "REDIS_URL", None)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def test_client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def fake_redis(monkeypatch):
    redis = FakeRedis()
    monkeypatch.setattr("shipquote.api.pricing.get_redis", lambda: redis)
    return redis


@pytest.fixture
def failing_redis(monkeypatch):
    redis = FakeRedis(fail=True)
    monkeypatch.setattr("shipquote.api.pricing.get_redis", lambda: redis)
    return redis


@pytest.fixture
def engine():
    return QuoteEngine(DEFAULT_PRICING_CONFIG)


@pytest.fixture
def override_engine():
    def _override(quote_engine: QuoteEngine):
        app.dependency_overrides[get_quote_engine] = lambda: quote_engine
    return _override


@pytest.fixture
def dallas_san_diego_quote():
    """Canonical regression fixture: Dallas to San Diego, flexible delivery."""
    return {
        "vehicle_type": "sedan",
        "distance_miles": 1358,
        "pickup_date": "2025-10-13",
        "delivery_date": "2025-10-20",
        "is_accident_recovery": False,
        "vehicle_count": 1,
        "surge_multiplier": 1,
        "fuel_price_per_gallon": 3.70,
    }


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "pricing: marks tests related to pricing"
    )
    config.addinivalue_line(
        "markers", "cache: marks tests related to quote caching"
    )
    config.addinivalue_line(
        "markers", "monitoring: marks tests related to health and metrics"
    )
