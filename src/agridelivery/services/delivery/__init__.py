"""Delivery order lifecycle."""

from .service import DeliveryOrderService
from .states import ACTIVE_STATUSES, TERMINAL_STATUSES, TRANSITIONS, can_transition, is_terminal

__all__ = [
    "DeliveryOrderService",
    "ACTIVE_STATUSES",
    "TERMINAL_STATUSES",
    "TRANSITIONS",
    "can_transition",
    "is_terminal",
]
