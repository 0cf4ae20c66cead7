"""Quoting, recommendation and pooling endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...config import settings
from ...errors import InvalidInputError
from ...schemas.delivery import (
    NO_PROVIDERS_MESSAGE,
    OptimalRequest,
    OptimalResponse,
    PoolingPlanRequest,
    PoolingSuggestionRequest,
    PoolingSuggestionResponse,
    PreviewRequest,
    PreviewResponse,
    ProductPreviewModel,
    QuoteListResponse,
    QuoteRequest,
    SellerQuoteModel,
    SellerQuotesRequest,
    SellerQuotesResponse,
)
from ...services.cart.grouping import group_by_seller, summarize_cart
from ...services.geospatial import distance
from ...services.pooling import HeuristicPoolingMatcher, PooledDeliveryPlan, plan_pooled_delivery
from ...services.quoting import (
    calculate_order_weight,
    delivery_preview,
    get_delivery_quotes,
    get_optimal_delivery_option,
    nearest_products,
    quote_seller_groups,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/delivery", tags=["delivery"])


def _internal_error(action: str, exc: Exception) -> HTTPException:
    logger.exception(f"Error {action}: {exc}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed {action}. Please check server logs for details.",
    )


def _resolve_distance(payload: QuoteRequest) -> float:
    if payload.distance_km is not None:
        return payload.distance_km
    if payload.buyer_location is None or payload.seller_location is None:
        raise InvalidInputError("Provide distance_km or both buyer_location and seller_location.")
    return distance(payload.seller_location, payload.buyer_location)


@router.post("/quotes", response_model=QuoteListResponse, status_code=status.HTTP_200_OK)
def delivery_quotes(payload: QuoteRequest) -> QuoteListResponse:
    try:
        distance_km = _resolve_distance(payload)
        if payload.order_weight_kg is not None:
            weight = payload.order_weight_kg
        else:
            weight = calculate_order_weight(payload.items or [])
        quotes = get_delivery_quotes(
            payload.order_value,
            weight,
            distance_km,
            payload.delivery_area,
            payload.zone or settings.default_delivery_zone,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        raise _internal_error("quoting delivery", exc) from exc

    return QuoteListResponse(
        available=bool(quotes),
        message=None if quotes else NO_PROVIDERS_MESSAGE,
        distance_km=distance_km,
        order_weight_kg=weight,
        quotes=quotes,
    )


@router.post("/optimal", response_model=OptimalResponse, status_code=status.HTTP_200_OK)
def optimal_delivery(payload: OptimalRequest) -> OptimalResponse:
    try:
        return OptimalResponse(option=get_optimal_delivery_option(payload.sellers, payload.buyer_location))
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        raise _internal_error("choosing a delivery option", exc) from exc


@router.post("/seller-quotes", response_model=SellerQuotesResponse, status_code=status.HTTP_200_OK)
def seller_quotes(payload: SellerQuotesRequest) -> SellerQuotesResponse:
    """Quote each seller of a split order and fold the fees into the cart summary."""
    try:
        result = quote_seller_groups(
            group_by_seller(payload.items),
            payload.buyer_location,
            delivery_area=payload.delivery_area,
            zone=payload.zone or settings.default_delivery_zone,
        )
        summary = summarize_cart(payload.items, result.groups, discount=payload.discount)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        raise _internal_error("quoting sellers", exc) from exc

    return SellerQuotesResponse(
        seller_quotes=[
            SellerQuoteModel(
                seller_id=entry.seller_id,
                seller_location=entry.seller_location,
                distance_km=entry.distance_km,
                weight_kg=entry.weight_kg,
                quotes=entry.quotes,
                recommended=entry.recommended,
            )
            for entry in result.seller_quotes
        ],
        groups=result.groups,
        summary=summary,
    )


@router.post("/pooling/suggestions", response_model=PoolingSuggestionResponse, status_code=status.HTTP_200_OK)
def pooling_suggestions(payload: PoolingSuggestionRequest) -> PoolingSuggestionResponse:
    try:
        suggestions = HeuristicPoolingMatcher().suggest(payload.order, payload.candidates)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        raise _internal_error("suggesting pooled deliveries", exc) from exc

    return PoolingSuggestionResponse(
        has_suggestions=suggestions.has_suggestions,
        best=suggestions.best,
        max_savings=suggestions.max_savings,
        average_wait_minutes=suggestions.average_wait_minutes,
        options=suggestions.options,
    )


@router.post("/pooling/plan", response_model=PooledDeliveryPlan, status_code=status.HTTP_200_OK)
def pooling_plan(payload: PoolingPlanRequest) -> PooledDeliveryPlan:
    try:
        return plan_pooled_delivery(payload.orders, payload.vehicle_type)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        raise _internal_error("planning pooled delivery", exc) from exc


@router.post("/preview", response_model=PreviewResponse, status_code=status.HTTP_200_OK)
def preview(payload: PreviewRequest) -> PreviewResponse:
    try:
        previews = [
            ProductPreviewModel(product_id=product.id, preview=delivery_preview(product, payload.buyer_location))
            for product in payload.products
        ]
        nearest = nearest_products(payload.products, payload.buyer_location, payload.radius_km)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        raise _internal_error("previewing delivery", exc) from exc
    return PreviewResponse(previews=previews, nearest=nearest)
