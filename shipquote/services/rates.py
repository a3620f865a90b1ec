import logging
from typing import Optional, Union

from shipquote.core.enums import DistanceBand, VehicleType
from shipquote.core.pricing_config import DEFAULT_PRICING_CONFIG, PricingConfig

logger = logging.getLogger(__name__)

VEHICLE_TYPE_ALIASES = {
    "sedan": VehicleType.SEDAN,
    "coupe": VehicleType.SEDAN,
    "hatchback": VehicleType.SEDAN,
    "suv": VehicleType.SUV,
    "van": VehicleType.SUV,
    "crossover": VehicleType.SUV,
    "truck": VehicleType.TRUCK,
    "pickup": VehicleType.TRUCK,
}
DEFAULT_VEHICLE_TYPE = VehicleType.SEDAN


def normalize_vehicle_type(vehicle_type: Optional[Union[str, VehicleType]]) -> VehicleType:
    """Map free-form vehicle descriptions onto a rate-table category.

    Unrecognized values fall back to sedan rather than failing the quote.
    """
    if isinstance(vehicle_type, VehicleType):
        return vehicle_type

    key = str(vehicle_type or "").strip().lower()
    category = VEHICLE_TYPE_ALIASES.get(key)
    if category is None:
        logger.debug(f"Unknown vehicle type {vehicle_type!r}, pricing as {DEFAULT_VEHICLE_TYPE}")
        return DEFAULT_VEHICLE_TYPE
    return category


def classify_distance(distance_miles: float, config: PricingConfig = DEFAULT_PRICING_CONFIG) -> DistanceBand:
    if distance_miles <= config.short_distance_max:
        return DistanceBand.SHORT
    if distance_miles <= config.mid_distance_max:
        return DistanceBand.MID
    return DistanceBand.LONG


def base_rate_per_mile(
    vehicle_type: VehicleType,
    band: DistanceBand,
    is_accident_recovery: bool = False,
    config: PricingConfig = DEFAULT_PRICING_CONFIG,
) -> float:
    return config.rates.rate(vehicle_type, band, is_accident_recovery)
