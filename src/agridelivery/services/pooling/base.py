"""Base classes for pooled-delivery matchers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence

from ...models.domain import GeoCoordinates, PooledDeliveryOption, SellerStop


@dataclass(frozen=True, slots=True)
class PoolingRequest:
    """The order looking for a pool partner."""

    order_id: str
    buyer_location: GeoCoordinates
    sellers: tuple[SellerStop, ...]
    order_value: float


@dataclass(frozen=True, slots=True)
class PoolCandidate:
    """Another active order that could share a delivery run."""

    order_id: str
    buyer_location: GeoCoordinates
    sellers: tuple[SellerStop, ...]
    order_value: float
    estimated_pickup: Optional[datetime] = None


@dataclass(slots=True)
class PoolingSuggestions:
    options: list[PooledDeliveryOption] = field(default_factory=list)

    @property
    def has_suggestions(self) -> bool:
        return bool(self.options)

    @property
    def best(self) -> Optional[PooledDeliveryOption]:
        return self.options[0] if self.options else None

    @property
    def max_savings(self) -> float:
        return max((option.estimated_savings for option in self.options), default=0.0)

    @property
    def average_wait_minutes(self) -> int:
        if not self.options:
            return 0
        return round(sum(option.wait_time_minutes for option in self.options) / len(self.options))


class PoolingMatcher(ABC):
    """Contract for pooled-delivery matchers.

    Suggestions are advisory: implementations must not create or modify any
    delivery order.
    """

    @abstractmethod
    def suggest(self, request: PoolingRequest, candidates: Sequence[PoolCandidate]) -> PoolingSuggestions:
        raise NotImplementedError
