"""Pydantic request/response models for delivery endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from ..models.domain import (
    CartItem,
    CartSummary,
    DeliveryQuote,
    DeliveryStatus,
    GeoCoordinates,
    OptimalDeliveryOption,
    PooledDeliveryOption,
    Product,
    SellerGroup,
    SellerStop,
    VehicleType,
)
from ..services.pooling.base import PoolCandidate, PoolingRequest
from ..services.quoting.preview import DeliveryPreview, NearbyProduct

NO_PROVIDERS_MESSAGE = "No delivery providers available"


class QuoteRequest(BaseModel):
    order_value: float = Field(..., description="Order subtotal in KES.")
    order_weight_kg: Optional[float] = Field(
        default=None, description="Total weight; derived from items when omitted."
    )
    items: Optional[list[CartItem]] = Field(default=None, description="Cart lines used to derive weight.")
    distance_km: Optional[float] = Field(
        default=None, description="Route distance; derived from the two coordinates when omitted."
    )
    buyer_location: Optional[GeoCoordinates] = None
    seller_location: Optional[GeoCoordinates] = None
    delivery_area: str = Field(..., description="Area name matched against provider service areas.")
    zone: Optional[str] = Field(default=None, description="Delivery zone code, e.g. ZONE_1.")


class QuoteListResponse(BaseModel):
    available: bool
    message: Optional[str] = None
    distance_km: float
    order_weight_kg: float
    quotes: list[DeliveryQuote]


class OptimalRequest(BaseModel):
    buyer_location: Optional[GeoCoordinates] = None
    sellers: list[SellerStop] = Field(default_factory=list)


class OptimalResponse(BaseModel):
    option: Optional[OptimalDeliveryOption] = None


class SellerQuotesRequest(BaseModel):
    items: list[CartItem]
    buyer_location: GeoCoordinates
    delivery_area: str
    zone: Optional[str] = None
    discount: float = 0.0


class SellerQuoteModel(BaseModel):
    seller_id: str
    seller_location: str
    distance_km: Optional[float] = None
    weight_kg: float
    quotes: list[DeliveryQuote]
    recommended: Optional[DeliveryQuote] = None


class SellerQuotesResponse(BaseModel):
    seller_quotes: list[SellerQuoteModel]
    groups: list[SellerGroup]
    summary: CartSummary


class PoolingSuggestionRequest(BaseModel):
    order: PoolingRequest
    candidates: list[PoolCandidate] = Field(default_factory=list)


class PoolingSuggestionResponse(BaseModel):
    has_suggestions: bool
    best: Optional[PooledDeliveryOption] = None
    max_savings: float
    average_wait_minutes: int
    options: list[PooledDeliveryOption]


class PoolingPlanRequest(BaseModel):
    orders: list[PoolCandidate]
    vehicle_type: VehicleType = "van"


class PreviewRequest(BaseModel):
    buyer_location: Optional[GeoCoordinates] = None
    products: list[Product] = Field(default_factory=list)
    radius_km: float = Field(default=50.0, ge=0.0)


class ProductPreviewModel(BaseModel):
    product_id: str
    preview: Optional[DeliveryPreview] = None


class PreviewResponse(BaseModel):
    previews: list[ProductPreviewModel]
    nearest: list[NearbyProduct]


class CreateDeliveryRequest(BaseModel):
    order_id: str
    provider_id: str
    pickup_address: str
    delivery_address: str
    delivery_fee: float
    distance_km: float
    special_instructions: Optional[str] = None


class StatusUpdateRequest(BaseModel):
    status: DeliveryStatus
    message: str
    location: Optional[str] = None
