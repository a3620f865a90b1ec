from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from shipquote.core.enums import DeliveryType, DistanceBand


class QuoteCalculatorRequest(BaseModel):
    vehicle_type: str = Field(min_length=1)
    distance_miles: float = Field(ge=0, allow_inf_nan=False)
    pickup_date: Optional[str] = None
    delivery_date: Optional[str] = None
    is_accident_recovery: bool = False
    vehicle_count: int = Field(1, ge=1)


class QuoteRequest(QuoteCalculatorRequest):
    surge_multiplier: Optional[float] = Field(None, gt=0, allow_inf_nan=False)
    fuel_price_per_gallon: Optional[float] = Field(None, ge=0, allow_inf_nan=False)


class QuoteBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    base_rate_per_mile: float
    distance_band: DistanceBand
    raw_base_price: float
    bulk_discount_percent: int
    bulk_discount_amount: float
    surge_multiplier: float
    delivery_type_multiplier: float
    delivery_type: DeliveryType
    fuel_price_per_gallon: float
    fuel_adjustment_percent: float
    minimum_applied: bool
    total: float


class QuoteResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: float
    breakdown: QuoteBreakdown


class DistanceRequest(BaseModel):
    origin_lat: float = Field(ge=-90, le=90)
    origin_lng: float = Field(ge=-180, le=180)
    dest_lat: float = Field(ge=-90, le=90)
    dest_lng: float = Field(ge=-180, le=180)


class DistanceResponse(BaseModel):
    distance_miles: float
    road_multiplier: float
