"""Delivery status transition table."""

from __future__ import annotations

from ...models.domain import DeliveryStatus

ACTIVE_STATUSES = frozenset(
    {DeliveryStatus.ASSIGNED, DeliveryStatus.PICKED_UP, DeliveryStatus.IN_TRANSIT}
)
TERMINAL_STATUSES = frozenset({DeliveryStatus.DELIVERED, DeliveryStatus.CANCELLED})

# Active states may repeat themselves to record progress pings.
TRANSITIONS: dict[DeliveryStatus, frozenset[DeliveryStatus]] = {
    DeliveryStatus.ASSIGNED: frozenset(
        {DeliveryStatus.ASSIGNED, DeliveryStatus.PICKED_UP, DeliveryStatus.CANCELLED}
    ),
    DeliveryStatus.PICKED_UP: frozenset(
        {DeliveryStatus.PICKED_UP, DeliveryStatus.IN_TRANSIT, DeliveryStatus.CANCELLED}
    ),
    DeliveryStatus.IN_TRANSIT: frozenset(
        {DeliveryStatus.IN_TRANSIT, DeliveryStatus.DELIVERED, DeliveryStatus.CANCELLED}
    ),
    DeliveryStatus.DELIVERED: frozenset(),
    DeliveryStatus.CANCELLED: frozenset(),
}


def can_transition(current: DeliveryStatus, requested: DeliveryStatus) -> bool:
    return requested in TRANSITIONS[current]


def is_terminal(status: DeliveryStatus) -> bool:
    return status in TERMINAL_STATUSES
