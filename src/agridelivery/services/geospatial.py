"""Geospatial helper functions: distances, distance-based fees and ETAs."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..errors import InvalidInputError
from ..models.domain import DeliveryZone, GeoCoordinates, VehicleType

EARTH_RADIUS_KM = 6371.0

BASE_FEE = 100.0
BASE_FEE_RADIUS_KM = 5.0
# (upper bound km, rate per km inside the band)
FEE_BANDS: tuple[tuple[float, float], ...] = (
    (20.0, 15.0),
    (50.0, 12.0),
    (math.inf, 10.0),
)

VEHICLE_SPEED_KMH: dict[str, float] = {
    "boda": 40.0,
    "van": 35.0,
    "pickup": 32.0,
    "truck": 28.0,
}

RUSH_HOUR_FACTOR = 0.6
NIGHT_FACTOR = 1.3
WEEKEND_FACTOR = 1.1


@dataclass(frozen=True, slots=True)
class Eta:
    minutes: int
    text: str


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def validate_coordinates(point: GeoCoordinates) -> None:
    if point is None:
        raise InvalidInputError("coordinates are required")
    if math.isnan(point.lat) or math.isnan(point.lng):
        raise InvalidInputError(f"coordinates contain NaN: {point}")
    if not -90.0 <= point.lat <= 90.0 or not -180.0 <= point.lng <= 180.0:
        raise InvalidInputError(f"coordinates out of range: {point}")


def distance(a: GeoCoordinates, b: GeoCoordinates) -> float:
    """Great-circle distance in kilometres between two points."""
    validate_coordinates(a)
    validate_coordinates(b)
    if a == b:
        return 0.0
    return haversine_km(a.lat, a.lng, b.lat, b.lng)


def delivery_fee(distance_km: float, zone: Optional[DeliveryZone] = None) -> float:
    """Distance-based delivery fee.

    Flat ``BASE_FEE`` up to ``BASE_FEE_RADIUS_KM``, then a per-km rate that
    steps down for longer bands. The result is scaled by the zone multiplier
    when a zone is given.
    """
    if distance_km is None or math.isnan(distance_km) or distance_km < 0:
        raise InvalidInputError(f"distance_km must be a non-negative number, got {distance_km!r}")

    fee = BASE_FEE
    lower = BASE_FEE_RADIUS_KM
    for upper, rate in FEE_BANDS:
        if distance_km <= lower:
            break
        fee += (min(distance_km, upper) - lower) * rate
        lower = upper

    if zone is not None:
        fee *= zone.fee_multiplier
    return fee


def _speed_factor(at: datetime) -> float:
    hour = at.hour
    if 7 <= hour <= 9 or 17 <= hour <= 19:
        return RUSH_HOUR_FACTOR
    if hour >= 22 or hour <= 5:
        return NIGHT_FACTOR
    if at.weekday() >= 5:
        return WEEKEND_FACTOR
    return 1.0


def format_eta(minutes: int) -> str:
    if minutes < 60:
        return f"{minutes} mins"
    if minutes < 120:
        hours, mins = divmod(minutes, 60)
        return f"{hours}h {mins}m" if mins else f"{hours} hour"
    return f"{math.ceil(minutes / 60)} hours"


def eta_for(distance_km: float, vehicle_type: VehicleType, at: Optional[datetime] = None) -> Eta:
    """Estimate travel time for ``distance_km`` with the given vehicle class.

    ``at`` applies rush-hour, night and weekend speed adjustments; without it
    the base speed is used so the result only depends on the arguments.
    """
    if distance_km is None or math.isnan(distance_km) or distance_km < 0:
        raise InvalidInputError(f"distance_km must be a non-negative number, got {distance_km!r}")
    try:
        speed = VEHICLE_SPEED_KMH[vehicle_type]
    except KeyError as exc:
        raise InvalidInputError(f"Unknown vehicle type '{vehicle_type}'.") from exc

    if at is not None:
        speed *= _speed_factor(at)
    minutes = math.ceil(distance_km * 60 / speed)
    return Eta(minutes=minutes, text=format_eta(minutes))


def format_distance(distance_km: float) -> str:
    if distance_km < 1:
        return f"{round(distance_km * 1000)}m away"
    return f"{round(distance_km, 1)}km away"


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up, as currency amounts are shown."""
    return math.floor(value + 0.5)
