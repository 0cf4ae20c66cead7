"""Pydantic request/response models for cart endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from ..models.domain import CartItem, CartSummary, SellerGroup


class CartSummaryRequest(BaseModel):
    items: list[CartItem] = Field(default_factory=list)
    discount: float = Field(default=0.0, ge=0.0)


class CartSummaryResponse(BaseModel):
    summary: CartSummary
    groups: list[SellerGroup]
