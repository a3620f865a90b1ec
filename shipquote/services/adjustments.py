import math
from typing import Optional

from shipquote.core.pricing_config import DEFAULT_PRICING_CONFIG, PricingConfig

# (minimum vehicle count, discount percent), highest tier first
BULK_DISCOUNT_TIERS = (
    (10, 20),
    (6, 15),
    (3, 10),
)


def bulk_discount_percent(vehicle_count: Optional[int], config: PricingConfig = DEFAULT_PRICING_CONFIG) -> int:
    if not config.bulk_discount_enabled or not vehicle_count:
        return 0
    for min_count, percent in BULK_DISCOUNT_TIERS:
        if vehicle_count >= min_count:
            return percent
    return 0


def effective_fuel_price(fuel_price_per_gallon: Optional[float], config: PricingConfig = DEFAULT_PRICING_CONFIG) -> float:
    """Return the fuel price to quote with, falling back to the configured current price."""
    if fuel_price_per_gallon is None:
        return config.current_fuel_price
    try:
        price = float(fuel_price_per_gallon)
    except (TypeError, ValueError):
        return config.current_fuel_price
    if not math.isfinite(price):
        return config.current_fuel_price
    return price


def fuel_adjustment_percent(fuel_price_per_gallon: float, config: PricingConfig = DEFAULT_PRICING_CONFIG) -> float:
    # Not clamped: every dollar away from the baseline moves the price linearly.
    return (fuel_price_per_gallon - config.base_fuel_price) * config.fuel_adjustment_per_dollar


def fuel_multiplier(adjustment_percent: float) -> float:
    return 1 + adjustment_percent / 100
