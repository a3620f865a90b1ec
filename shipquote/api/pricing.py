"""Pricing endpoints with Redis caching"""
import hashlib
import json
import logging
from functools import lru_cache
from fastapi import APIRouter, Depends

from shipquote.core.config import settings
from shipquote.core.metrics import (
    cache_hits,
    cache_misses,
    quote_minimum_applied,
    quote_total_amount,
    quotes_calculated,
)
from shipquote.core.pricing_config import PricingConfig, load_pricing_config
from shipquote.core.redis import get_redis
from shipquote.schemas.quote import (
    DistanceRequest,
    DistanceResponse,
    QuoteCalculatorRequest,
    QuoteRequest,
    QuoteResponse,
)
from shipquote.services.distance import haversine_miles
from shipquote.services.pricing import QuoteEngine, QuoteInput
from shipquote.services.rates import normalize_vehicle_type

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/pricing", tags=["pricing"])


@lru_cache
def get_quote_engine() -> QuoteEngine:
    return QuoteEngine(load_pricing_config(settings.PRICING_CONFIG_PATH))


def _generate_cache_key(req: QuoteCalculatorRequest, config: PricingConfig) -> str:
    params = {"request": req.model_dump(), "config": config.model_dump()}
    params_str = json.dumps(params, sort_keys=True, default=str)
    return f"price:{hashlib.sha256(params_str.encode()).hexdigest()}"


async def _cached_quote(req: QuoteCalculatorRequest, engine: QuoteEngine) -> QuoteResponse:
    cache_key = _generate_cache_key(req, engine.config)
    redis = get_redis()

    if redis is not None:
        try:
            cached = await redis.get(cache_key)
            if cached:
                cache_hits.labels(cache="quote").inc()
                return QuoteResponse.model_validate_json(cached)
            cache_misses.labels(cache="quote").inc()
        except Exception as e:
            logger.warning(f"Cache retrieval failed: {e}")

    result = engine.calculate(QuoteInput(**req.model_dump()))
    breakdown = result.breakdown

    quotes_calculated.labels(
        vehicle_type=str(normalize_vehicle_type(req.vehicle_type)),
        distance_band=str(breakdown.distance_band),
        delivery_type=str(breakdown.delivery_type),
    ).inc()
    if breakdown.minimum_applied:
        quote_minimum_applied.labels(accident_recovery=str(req.is_accident_recovery).lower()).inc()
    quote_total_amount.observe(result.total)

    if redis is not None:
        try:
            await redis.set(
                cache_key,
                result.model_dump_json(by_alias=True),
                ex=settings.PRICE_CACHE_TTL
            )
        except Exception as e:
            logger.warning(f"Cache write failed: {e}")

    return result


@router.post("/quote", response_model=QuoteResponse)
async def quote(req: QuoteRequest, engine: QuoteEngine = Depends(get_quote_engine)):
    return await _cached_quote(req, engine)


@router.post("/calculate", response_model=QuoteResponse)
async def calculate(req: QuoteCalculatorRequest, engine: QuoteEngine = Depends(get_quote_engine)):
    """Website calculator: no surge or fuel inputs, those take their defaults."""
    return await _cached_quote(req, engine)


@router.post("/distance", response_model=DistanceResponse)
async def distance(req: DistanceRequest):
    multiplier = settings.ROAD_MULTIPLIER
    miles = haversine_miles(req.origin_lat, req.origin_lng, req.dest_lat, req.dest_lng, multiplier)
    return DistanceResponse(distance_miles=miles, road_multiplier=multiplier)


@router.get("/config", response_model=PricingConfig)
async def active_config(engine: QuoteEngine = Depends(get_quote_engine)):
    return engine.config
