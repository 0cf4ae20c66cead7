"""Exception types raised by the delivery engine."""

from __future__ import annotations


class DeliveryEngineError(Exception):
    """Base class for all engine failures."""


class InvalidInputError(DeliveryEngineError, ValueError):
    """An input violates a documented invariant (negative amount, bad coordinates, ...)."""


class LocationResolutionError(InvalidInputError):
    """A manual location could not be given coordinates."""


class DeliveryNotFoundError(DeliveryEngineError, LookupError):
    """No delivery order exists with the requested id."""


class IllegalTransitionError(DeliveryEngineError):
    """A delivery order cannot move from its current status to the requested one."""

    def __init__(self, delivery_id: str, current: str, requested: str) -> None:
        super().__init__(f"Delivery '{delivery_id}' cannot move from '{current}' to '{requested}'.")
        self.delivery_id = delivery_id
        self.current = current
        self.requested = requested


class PersistenceError(DeliveryEngineError):
    """The key/value store failed to read or write."""


class GeolocationError(DeliveryEngineError):
    """The device position could not be obtained."""


class PermissionDeniedError(GeolocationError):
    """The user declined location access."""


class GeolocationUnavailableError(GeolocationError):
    """Location services are unavailable or returned an unusable fix."""
