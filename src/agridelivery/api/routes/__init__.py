"""Route group exports."""

from . import cart, deliveries, delivery, health

__all__ = ["cart", "deliveries", "delivery", "health"]
