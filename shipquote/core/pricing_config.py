"""Immutable pricing configuration: rate table plus every tunable constant.

The defaults reproduce the production rate card. A JSON file named by
``PRICING_CONFIG_PATH`` can replace them without a code change; partial files
are merged over the defaults.
"""
import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from shipquote.core.enums import DistanceBand, VehicleType

logger = logging.getLogger(__name__)


class PricingConfigError(Exception):
    """Raised when a pricing config cannot be loaded or fails validation."""


class VehicleRates(BaseModel):
    model_config = ConfigDict(frozen=True)

    short: float = Field(ge=0)
    mid: float = Field(ge=0)
    long: float = Field(ge=0)
    accident: float = Field(ge=0)


class RateTable(BaseModel):
    """Per-mile rates by canonical vehicle type."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    sedan: VehicleRates = VehicleRates(short=1.80, mid=0.95, long=0.60, accident=2.50)
    suv: VehicleRates = VehicleRates(short=2.00, mid=1.05, long=0.70, accident=2.75)
    truck: VehicleRates = VehicleRates(short=2.20, mid=1.15, long=0.75, accident=3.00)

    def rates_for(self, vehicle_type: VehicleType) -> VehicleRates:
        return getattr(self, VehicleType(vehicle_type).value)

    def rate(self, vehicle_type: VehicleType, band: DistanceBand, is_accident_recovery: bool = False) -> float:
        rates = self.rates_for(vehicle_type)
        if is_accident_recovery:
            return rates.accident
        return getattr(rates, DistanceBand(band).value)


class PricingConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    min_quote: float = Field(150.0, ge=0)
    accident_min_quote: float = Field(80.0, ge=0)
    min_miles: float = Field(100.0, ge=0)

    base_fuel_price: float = Field(3.70, ge=0)
    # used when a quote request carries no fuel price
    current_fuel_price: float = Field(3.70, ge=0)
    fuel_adjustment_per_dollar: float = 5.0

    # used when a quote request carries no surge multiplier
    surge_enabled: bool = False
    surge_multiplier: float = Field(1.0, ge=0, le=10)
    surge_reason: Optional[str] = None

    expedited_multiplier: float = Field(1.25, ge=0, le=5)
    standard_multiplier: float = Field(1.0, ge=0, le=5)
    flexible_multiplier: float = Field(0.95, ge=0, le=2)
    flexible_min_days: int = Field(7, ge=1)
    expedited_service_enabled: bool = True
    flexible_service_enabled: bool = True

    short_distance_max: float = Field(500.0, gt=0)
    mid_distance_max: float = Field(1500.0, gt=0)

    bulk_discount_enabled: bool = True

    rates: RateTable = RateTable()

    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_distance_bands(self):
        if self.mid_distance_max <= self.short_distance_max:
            raise ValueError("mid_distance_max must be greater than short_distance_max")
        return self


DEFAULT_PRICING_CONFIG = PricingConfig()

# bookkeeping columns on exported pricing_config rows, not pricing inputs
RECORD_METADATA_FIELDS = ("id", "is_active", "created_at", "created_by", "updated_at", "updated_by", "change_reason")


def load_pricing_config(path: Optional[str] = None) -> PricingConfig:
    if not path:
        return DEFAULT_PRICING_CONFIG

    try:
        raw = json.loads(Path(path).read_text())
    except (OSError, json.JSONDecodeError) as e:
        raise PricingConfigError(f"Cannot read pricing config {path}: {e}") from e

    if not isinstance(raw, dict):
        raise PricingConfigError(f"Pricing config {path} must contain a JSON object")

    for field in RECORD_METADATA_FIELDS:
        raw.pop(field, None)

    merged = DEFAULT_PRICING_CONFIG.model_dump()
    rates = raw.pop("rates", None)
    if rates is None:
        rates = {}
    elif not isinstance(rates, dict):
        raise PricingConfigError(f"rates in {path} must be a JSON object")
    merged.update(raw)
    for vehicle_type, vehicle_rates in rates.items():
        if not isinstance(vehicle_rates, dict):
            raise PricingConfigError(f"Rates for {vehicle_type} in {path} must be a JSON object")
        merged["rates"].setdefault(vehicle_type, {}).update(vehicle_rates)

    try:
        config = PricingConfig.model_validate(merged)
    except ValidationError as e:
        raise PricingConfigError(f"Invalid pricing config {path}: {e}") from e

    logger.info(f"Loaded pricing config from {path}")
    return config
