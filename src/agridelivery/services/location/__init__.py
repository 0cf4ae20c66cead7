"""Buyer location session."""

from .areas import COUNTIES, County, find_county
from .events import LocationEvents
from .geolocation import GeolocationProvider, HttpGeolocationProvider, StaticGeolocationProvider
from .session import LocationSession

__all__ = [
    "COUNTIES",
    "County",
    "find_county",
    "LocationEvents",
    "GeolocationProvider",
    "HttpGeolocationProvider",
    "StaticGeolocationProvider",
    "LocationSession",
]
