"""Order weight estimation from units of measure."""

from __future__ import annotations

from typing import Iterable

from ...models.domain import CartItem

DEFAULT_UNIT_WEIGHT_KG = 1.0

UNIT_WEIGHTS_KG: dict[str, float] = {
    "kg": 1.0,
    "liter": 1.03,
    "piece": 0.5,
    "bunch": 2.0,
    "50kg bag": 50.0,
    "cup": 0.2,
}


def unit_weight(unit: str | None) -> float:
    """Per-unit weight in kg; unknown units weigh ``DEFAULT_UNIT_WEIGHT_KG``."""
    if not unit:
        return DEFAULT_UNIT_WEIGHT_KG
    return UNIT_WEIGHTS_KG.get(unit.strip().lower(), DEFAULT_UNIT_WEIGHT_KG)


def calculate_order_weight(cart_items: Iterable[CartItem]) -> float:
    return sum(unit_weight(item.product.unit) * item.quantity for item in cart_items)
