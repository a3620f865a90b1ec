"""Vehicle shipping quote engine.

The pipeline runs in a fixed order because the minimum-quote floor is only
evaluated once every multiplier has been applied:

1. normalize vehicle type, classify distance band
2. base rate (accident rate overrides the band rate)
3. raw base price = rate * miles
4. bulk discount
5. delivery type multiplier, surge (request value, else the configured surge)
6. subtotal = (raw - discount) * surge * delivery multiplier
7. fuel adjustment
8. minimum-quote floor
9. total rounded to cents

Only ``total`` feeds from the unrounded subtotal; the other breakdown figures
are rounded for display.
"""
import logging
import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from shipquote.core.enums import VehicleType
from shipquote.core.pricing_config import DEFAULT_PRICING_CONFIG, PricingConfig
from shipquote.schemas.quote import QuoteBreakdown, QuoteResponse
from shipquote.services.adjustments import (
    bulk_discount_percent,
    effective_fuel_price,
    fuel_adjustment_percent,
    fuel_multiplier,
)
from shipquote.services.delivery import DateLike, resolve_delivery_type
from shipquote.services.rates import base_rate_per_mile, classify_distance, normalize_vehicle_type

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

# enough digits for the largest float with two decimals
CURRENCY_PRECISION = 400


def round_currency(value: float) -> float:
    """Round half-up to cents using the exact binary value of ``value``.

    Infinities and NaN are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    with localcontext() as ctx:
        ctx.prec = CURRENCY_PRECISION
        return float(Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP))


class QuoteInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    vehicle_type: Union[str, VehicleType]
    distance_miles: float
    is_accident_recovery: bool = False
    vehicle_count: Optional[int] = 1
    # None defers to the configured surge
    surge_multiplier: Optional[float] = None
    pickup_date: Optional[DateLike] = None
    delivery_date: Optional[DateLike] = None
    fuel_price_per_gallon: Optional[float] = None


class QuoteEngine:
    def __init__(self, config: PricingConfig = DEFAULT_PRICING_CONFIG):
        self.config = config

    def _apply_minimum(self, subtotal: float, quote: QuoteInput) -> tuple[float, bool]:
        config = self.config
        if quote.is_accident_recovery:
            if subtotal < config.accident_min_quote:
                return config.accident_min_quote, True
        elif quote.distance_miles < config.min_miles and subtotal < config.min_quote:
            return config.min_quote, True
        return subtotal, False

    def _surge(self, quote: QuoteInput) -> float:
        if quote.surge_multiplier is not None:
            return quote.surge_multiplier
        if self.config.surge_enabled:
            return self.config.surge_multiplier
        return 1.0

    def calculate(self, quote: QuoteInput) -> QuoteResponse:
        config = self.config

        vehicle_type = normalize_vehicle_type(quote.vehicle_type)
        distance_band = classify_distance(quote.distance_miles, config)

        rate = base_rate_per_mile(vehicle_type, distance_band, quote.is_accident_recovery, config)
        raw_base_price = rate * quote.distance_miles

        discount_percent = bulk_discount_percent(quote.vehicle_count, config)
        discount_amount = raw_base_price * discount_percent / 100

        delivery = resolve_delivery_type(quote.pickup_date, quote.delivery_date, config)

        surge = self._surge(quote)
        subtotal = (raw_base_price - discount_amount) * surge * delivery.multiplier

        fuel_price = effective_fuel_price(quote.fuel_price_per_gallon, config)
        fuel_percent = fuel_adjustment_percent(fuel_price, config)
        subtotal = subtotal * fuel_multiplier(fuel_percent)

        subtotal, minimum_applied = self._apply_minimum(subtotal, quote)

        total = round_currency(max(0.0, subtotal))

        breakdown = QuoteBreakdown(
            base_rate_per_mile=rate,
            distance_band=distance_band,
            raw_base_price=round_currency(raw_base_price),
            bulk_discount_percent=discount_percent,
            bulk_discount_amount=round_currency(discount_amount),
            surge_multiplier=surge,
            delivery_type_multiplier=delivery.multiplier,
            delivery_type=delivery.type,
            fuel_price_per_gallon=round_currency(fuel_price),
            fuel_adjustment_percent=round_currency(fuel_percent),
            minimum_applied=minimum_applied,
            total=total,
        )
        logger.debug(f"Calculated quote for {vehicle_type} over {quote.distance_miles} mi: {breakdown.model_dump()}")
        return QuoteResponse(total=total, breakdown=breakdown)


default_engine = QuoteEngine()


def calculate_quote(quote: QuoteInput, config: Optional[PricingConfig] = None) -> QuoteResponse:
    if config is None:
        return default_engine.calculate(quote)
    return QuoteEngine(config).calculate(quote)
