from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from starlette.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware
from shipquote.api import pricing
from shipquote.core.config import settings
from shipquote.core.redis import init_redis, close_redis, get_redis
from shipquote.core.metrics import request_count, request_duration, redis_connected, get_metrics_text
import time
import logging

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        try:
            response = await call_next(request)
            duration = time.time() - start_time

            request_count.labels(
                method=request.method,
                endpoint=request.url.path,
                status=response.status_code
            ).inc()

            request_duration.labels(
                method=request.method,
                endpoint=request.url.path
            ).observe(duration)

            return response
        except Exception:
            duration = time.time() - start_time
            request_count.labels(
                method=request.method,
                endpoint=request.url.path,
                status=500
            ).inc()
            request_duration.labels(
                method=request.method,
                endpoint=request.url.path
            ).observe(duration)
            raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting...")

    # Fail fast on a broken pricing config rather than on the first quote
    engine = pricing.get_quote_engine()
    logger.info(f"Pricing config loaded (base fuel price {engine.config.base_fuel_price})")

    if settings.REDIS_URL:
        logger.info("Initializing Redis connection...")
        try:
            await init_redis()
            redis_connected.set(1)
            logger.info("Redis connected")
        except Exception as e:
            logger.error(f"Redis connection failed, quotes will not be cached: {e}")
            redis_connected.set(0)
    else:
        logger.info("REDIS_URL not set, quote caching disabled")

    yield

    logger.info("Application shutting down...")
    await close_redis()
    redis_connected.set(0)
    logger.info("Shutdown complete")


app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan
)

app.add_middleware(MetricsMiddleware)

app.include_router(pricing.router)


@app.get("/metrics", tags=["monitoring"])
async def metrics():
    return Response(
        content=get_metrics_text(),
        media_type="text/plain; version=0.0.4; charset=utf-8"
    )


@app.get("/health", tags=["monitoring"])
async def health_check():
    redis = get_redis()

    if not settings.REDIS_URL:
        redis_status = "disabled"
    else:
        redis_status = "connected" if redis is not None else "disconnected"

    return {
        "status": "healthy",
        "service": settings.API_TITLE,
        "version": settings.API_VERSION,
        "dependencies": {
            "redis": redis_status,
        }
    }


@app.get("/readiness", tags=["monitoring"])
async def readiness_check():
    if settings.REDIS_URL and get_redis() is None:
        return JSONResponse(
            status_code=503,
            content={"ready": False, "reason": "Redis not available"}
        )

    return {
        "ready": True,
        "service": settings.API_TITLE
    }


@app.get("/", tags=["root"])
async def root():
    return {
        "message": settings.API_TITLE,
        "version": settings.API_VERSION,
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics"
    }
