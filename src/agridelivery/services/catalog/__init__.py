"""Provider catalog and delivery zones."""

from .matching import AreaMatcher, ExactAreaMatcher, SubstringAreaMatcher, get_available_providers
from .providers import DELIVERY_PROVIDERS, get_provider
from .zones import DELIVERY_ZONES, get_zone, zone_for_area

__all__ = [
    "AreaMatcher",
    "ExactAreaMatcher",
    "SubstringAreaMatcher",
    "get_available_providers",
    "DELIVERY_PROVIDERS",
    "get_provider",
    "DELIVERY_ZONES",
    "get_zone",
    "zone_for_area",
]
