"""Cart projection endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from ...schemas.cart import CartSummaryRequest, CartSummaryResponse
from ...services.cart.grouping import group_by_seller, summarize_cart

router = APIRouter(prefix="/cart", tags=["cart"])


@router.post("/summary", response_model=CartSummaryResponse, status_code=status.HTTP_200_OK)
def cart_summary(payload: CartSummaryRequest) -> CartSummaryResponse:
    """Group cart lines by seller and total them. Delivery fees stay zero until quoted."""
    try:
        groups = group_by_seller(payload.items)
        summary = summarize_cart(payload.items, groups, discount=payload.discount)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return CartSummaryResponse(summary=summary, groups=groups)
