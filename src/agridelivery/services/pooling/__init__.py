"""Pooled-delivery suggestions and plans."""

from .base import PoolCandidate, PoolingMatcher, PoolingRequest, PoolingSuggestions
from .heuristic import HeuristicPoolingMatcher
from .plan import PooledDeliveryPlan, plan_pooled_delivery

__all__ = [
    "PoolCandidate",
    "PoolingMatcher",
    "PoolingRequest",
    "PoolingSuggestions",
    "HeuristicPoolingMatcher",
    "PooledDeliveryPlan",
    "plan_pooled_delivery",
]
