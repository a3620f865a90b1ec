"""Delivery urgency from the requested pickup and delivery dates.

Expedited: pickup with no delivery date (ASAP), or delivery within
``flexible_min_days`` of pickup. Flexible: delivery at least that many days
out. Standard: no pickup date, or dates that cannot be parsed. A tier
switched off in the pricing config is quoted as standard.
"""
import logging
import math
from datetime import date, datetime, time, timezone
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from shipquote.core.enums import DeliveryType
from shipquote.core.pricing_config import DEFAULT_PRICING_CONFIG, PricingConfig

logger = logging.getLogger(__name__)

DateLike = Union[str, date, datetime]

SECONDS_PER_DAY = 24 * 60 * 60


class DeliveryTypeInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: DeliveryType
    multiplier: float


def _to_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        parsed = datetime.fromisoformat(value.strip())
    else:
        raise TypeError(f"Unsupported date value: {value!r}")

    # naive values are read as UTC, same as bare ISO dates
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def resolve_delivery_type(
    pickup_date: Optional[DateLike] = None,
    delivery_date: Optional[DateLike] = None,
    config: PricingConfig = DEFAULT_PRICING_CONFIG,
) -> DeliveryTypeInfo:
    standard = DeliveryTypeInfo(type=DeliveryType.STANDARD, multiplier=config.standard_multiplier)
    expedited = standard
    if config.expedited_service_enabled:
        expedited = DeliveryTypeInfo(type=DeliveryType.EXPEDITED, multiplier=config.expedited_multiplier)
    flexible = standard
    if config.flexible_service_enabled:
        flexible = DeliveryTypeInfo(type=DeliveryType.FLEXIBLE, multiplier=config.flexible_multiplier)

    if pickup_date is None or pickup_date == "":
        return standard

    if delivery_date is None or delivery_date == "":
        return expedited

    try:
        pickup = _to_datetime(pickup_date)
        delivery = _to_datetime(delivery_date)
    except (TypeError, ValueError) as e:
        logger.warning(
            f"Could not parse delivery dates (pickup={pickup_date!r}, delivery={delivery_date!r}), "
            f"using standard pricing: {e}"
        )
        return standard

    days_diff = math.ceil((delivery - pickup).total_seconds() / SECONDS_PER_DAY)
    if days_diff < config.flexible_min_days:
        return expedited
    return flexible
