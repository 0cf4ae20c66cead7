"""Distance-based pooled-delivery heuristic."""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from ...config import settings
from ...errors import InvalidInputError
from ...models.domain import PooledDeliveryOption, PoolingTier, SellerStop
from ..geospatial import distance, round_half_up
from .base import PoolCandidate, PoolingMatcher, PoolingRequest, PoolingSuggestions

logger = logging.getLogger(__name__)

COMMON_ROUTE_SAVINGS_RATE = 0.15
NEARBY_SAVINGS_PER_KM = 20 * 0.35
MINUTES_PER_KM_DETOUR = 2
WAIT_PENALTY_PER_MINUTE = 2


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def recommendation_tier(savings: float, wait_minutes: int) -> PoolingTier:
    if savings > 100 and wait_minutes < 30:
        return "highly_recommended"
    if savings > 50:
        return "recommended"
    return "optional"


class HeuristicPoolingMatcher(PoolingMatcher):
    """Pair the order with nearby candidates and estimate what pooling saves."""

    def __init__(
        self,
        *,
        max_radius_km: float | None = None,
        common_seller_radius_km: float | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.max_radius_km = settings.pooling_max_radius_km if max_radius_km is None else max_radius_km
        self.common_seller_radius_km = (
            settings.pooling_common_seller_radius_km
            if common_seller_radius_km is None
            else common_seller_radius_km
        )
        self.clock = clock

    def _common_sellers(self, ours: Sequence[SellerStop], theirs: Sequence[SellerStop]) -> list[str]:
        return [
            seller.seller_name
            for seller in ours
            if any(
                distance(seller.coordinates, other.coordinates) < self.common_seller_radius_km
                for other in theirs
            )
        ]

    def _wait_minutes(self, candidate: PoolCandidate, distance_km: float, now: datetime) -> int:
        if candidate.estimated_pickup is None:
            return round_half_up(distance_km * MINUTES_PER_KM_DETOUR)
        seconds = (candidate.estimated_pickup - now).total_seconds()
        return max(0, math.ceil(seconds / 60))

    def _option(self, request: PoolingRequest, candidate: PoolCandidate, now: datetime) -> Optional[PooledDeliveryOption]:
        distance_km = distance(request.buyer_location, candidate.buyer_location)
        if distance_km > self.max_radius_km:
            return None

        common = self._common_sellers(request.sellers, candidate.sellers)
        if common:
            savings = round_half_up((request.order_value + candidate.order_value) * COMMON_ROUTE_SAVINGS_RATE)
        else:
            savings = round_half_up(distance_km * NEARBY_SAVINGS_PER_KM)
        wait = self._wait_minutes(candidate, distance_km, now)

        return PooledDeliveryOption(
            pool_id=f"POOL-{candidate.order_id}",
            order_id=candidate.order_id,
            distance_km=distance_km,
            estimated_savings=max(0, savings),
            wait_time_minutes=wait,
            pooling_type="common_route" if common else "nearby_delivery",
            common_sellers=common,
            recommendation=recommendation_tier(savings, wait),
        )

    def suggest(self, request: PoolingRequest, candidates: Sequence[PoolCandidate]) -> PoolingSuggestions:
        if request.order_value < 0 or any(candidate.order_value < 0 for candidate in candidates):
            raise InvalidInputError("order values must be non-negative")

        now = self.clock()
        options = []
        for candidate in candidates:
            if candidate.order_id == request.order_id:
                continue
            option = self._option(request, candidate, now)
            if option is not None:
                options.append(option)

        options.sort(
            key=lambda option: (
                -(option.estimated_savings - option.wait_time_minutes * WAIT_PENALTY_PER_MINUTE),
                option.order_id,
            )
        )
        logger.info(f"Found {len(options)} pooling options for order {request.order_id}")
        return PoolingSuggestions(options=options)
