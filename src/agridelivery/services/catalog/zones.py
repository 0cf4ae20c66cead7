"""Named delivery zones used as fee modifiers."""

from __future__ import annotations

from typing import Optional

from ...errors import InvalidInputError
from ...models.domain import DeliveryZone

DELIVERY_ZONES: dict[str, DeliveryZone] = {
    "ZONE_1": DeliveryZone(
        code="ZONE_1",
        name="Nairobi Metro",
        areas=("Nairobi CBD", "Westlands", "Karen", "Langata", "Kasarani"),
        base_delivery_fee=150,
        free_delivery_threshold=2000,
        fee_multiplier=1.0,
    ),
    "ZONE_2": DeliveryZone(
        code="ZONE_2",
        name="Greater Nairobi",
        areas=("Kiambu", "Thika", "Machakos", "Kajiado"),
        base_delivery_fee=250,
        free_delivery_threshold=3000,
        fee_multiplier=1.2,
    ),
    "ZONE_3": DeliveryZone(
        code="ZONE_3",
        name="Central Kenya",
        areas=("Nakuru", "Nyeri", "Meru", "Embu"),
        base_delivery_fee=400,
        free_delivery_threshold=5000,
        fee_multiplier=1.5,
    ),
    "ZONE_4": DeliveryZone(
        code="ZONE_4",
        name="Extended Regions",
        areas=("Eldoret", "Kisumu", "Mombasa", "Garissa"),
        base_delivery_fee=600,
        free_delivery_threshold=8000,
        fee_multiplier=1.8,
    ),
}


def get_zone(code: str) -> DeliveryZone:
    try:
        return DELIVERY_ZONES[code.strip().upper()]
    except KeyError as exc:
        raise InvalidInputError(f"Unknown delivery zone '{code}'.") from exc


def zone_for_area(area: str) -> Optional[DeliveryZone]:
    """Return the first zone listing ``area`` (case-insensitive), if any."""
    needle = area.strip().lower()
    if not needle:
        return None
    for zone in DELIVERY_ZONES.values():
        if any(needle == candidate.lower() for candidate in zone.areas):
            return zone
    return None
