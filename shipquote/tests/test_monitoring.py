import pytest

from shipquote.core import redis as redis_client
from shipquote.core.config import settings
from shipquote.main import app, lifespan


pytestmark = pytest.mark.monitoring


class TestProbes:

    @pytest.mark.asyncio
    async def test_health_without_redis(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == settings.API_VERSION
        assert data["dependencies"]["redis"] == "disabled"

    @pytest.mark.asyncio
    async def test_health_with_redis_down(self, test_client, monkeypatch):
        monkeypatch.setattr(settings, "REDIS_URL", "redis://localhost:6399/0")

        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["dependencies"]["redis"] == "disconnected"

    @pytest.mark.asyncio
    async def test_ready_when_redis_not_configured(self, test_client):
        response = await test_client.get("/readiness")

        assert response.status_code == 200
        assert response.json()["ready"] is True

    @pytest.mark.asyncio
    async def test_not_ready_when_redis_unavailable(self, test_client, monkeypatch):
        monkeypatch.setattr(settings, "REDIS_URL", "redis://localhost:6399/0")

        response = await test_client.get("/readiness")

        assert response.status_code == 503
        assert response.json() == {"ready": False, "reason": "Redis not available"}

    @pytest.mark.asyncio
    async def test_root(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"


class TestMetrics:

    @pytest.mark.asyncio
    async def test_quote_metrics_exported(self, test_client):
        await test_client.post("/pricing/quote", json={"vehicle_type": "sedan", "distance_miles": 50})

        response = await test_client.get("/metrics")

        assert response.status_code == 200
        content = response.text
        assert "http_requests_total" in content
        assert 'quotes_calculated_total{vehicle_type="sedan",distance_band="short",delivery_type="standard"}' in content
        assert 'quote_minimum_applied_total{accident_recovery="false"}' in content
        assert "quote_total_dollars_bucket" in content


class TestLifespan:

    @pytest.mark.asyncio
    async def test_starts_without_redis(self):
        async with lifespan(app):
            pass

    @pytest.mark.asyncio
    async def test_unreachable_redis_does_not_block_startup(self, monkeypatch):
        async def refuse():
            raise ConnectionError("connection refused")

        monkeypatch.setattr(settings, "REDIS_URL", "redis://localhost:6399/0")
        monkeypatch.setattr("shipquote.main.init_redis", refuse)

        async with lifespan(app):
            pass


class StubRedis:
    def __init__(self):
        self.closed = False

    async def ping(self):
        return True

    async def aclose(self):
        self.closed = True


class TestRedisClient:

    @pytest.mark.asyncio
    async def test_init_requires_configured_url(self):
        with pytest.raises(RuntimeError):
            await redis_client.init_redis()
        assert redis_client.get_redis() is None

    @pytest.mark.asyncio
    async def test_init_connects_to_configured_url(self, monkeypatch):
        urls = []
        stub = StubRedis()

        def from_url(url, **kwargs):
            urls.append(url)
            return stub

        monkeypatch.setattr(settings, "REDIS_URL", "redis://cache.internal:6379/2")
        monkeypatch.setattr(redis_client.Redis, "from_url", from_url)

        assert await redis_client.init_redis() is stub
        assert urls == ["redis://cache.internal:6379/2"]
        assert redis_client.get_redis() is stub

        await redis_client.close_redis()
        assert stub.closed is True
        assert redis_client.get_redis() is None
