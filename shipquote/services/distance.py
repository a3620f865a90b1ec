"""Approximate road distance between two coordinates.

Great-circle (haversine) distance scaled by a fixed road-correction factor.
This is a heuristic for quoting when no routing engine result is available;
it is not a driving route.
"""
import math

from shipquote.core.config import settings

EARTH_RADIUS_MILES = 3959


def haversine_miles(lat1: float, lng1: float, lat2: float, lng2: float, road_multiplier: float | None = None) -> float:
    if road_multiplier is None:
        road_multiplier = settings.ROAD_MULTIPLIER

    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return round(EARTH_RADIUS_MILES * c * road_multiplier, 2)
