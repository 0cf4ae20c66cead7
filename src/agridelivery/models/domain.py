"""Domain models for carts, providers, quotes and tracked deliveries."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Literal, Optional

VehicleType = Literal["boda", "van", "pickup", "truck"]
PoolingType = Literal["common_route", "nearby_delivery"]
PoolingTier = Literal["highly_recommended", "recommended", "optional"]


class DeliveryStatus(str, Enum):
    ASSIGNED = "assigned"
    PICKED_UP = "picked_up"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class GeoCoordinates:
    lat: float
    lng: float


@dataclass(slots=True)
class UserLocation:
    """The buyer's position plus optional labels from the administrative hierarchy."""

    coordinates: Optional[GeoCoordinates] = None
    label: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    county: Optional[str] = None
    county_id: Optional[str] = None
    sub_county: Optional[str] = None
    sub_county_id: Optional[str] = None
    ward: Optional[str] = None
    ward_id: Optional[str] = None
    timestamp: Optional[datetime] = None


@dataclass(slots=True)
class Product:
    """Delivery-relevant view of a catalog product."""

    id: str
    name: str
    vendor: str
    price: float
    unit: str = "kg"
    coordinates: Optional[GeoCoordinates] = None
    location: str = ""
    category: Optional[str] = None
    in_stock: bool = True


@dataclass(slots=True)
class CartItem:
    product: Product
    quantity: int
    seller_id: Optional[str] = None
    seller_name: Optional[str] = None
    seller_location: Optional[str] = None


@dataclass(slots=True)
class SellerGroup:
    """Items of one seller with their own subtotal and delivery fee."""

    seller_id: str
    seller_name: str
    seller_location: str
    items: list[CartItem]
    subtotal: float
    delivery_fee: float = 0.0
    estimated_delivery: Optional[str] = None
    seller_coordinates: Optional[GeoCoordinates] = None


@dataclass(slots=True)
class CartSummary:
    subtotal: float
    delivery_fee: float
    discount: float
    total: float
    item_count: int
    seller_count: int
    is_split_order: bool


@dataclass(frozen=True, slots=True)
class DriverDetails:
    name: str
    phone: str
    rating: float
    years_experience: int = 0
    id_verified: bool = True


@dataclass(frozen=True, slots=True)
class VehicleDetails:
    license_plate: str
    model: str
    year: int
    insurance_verified: bool = True


@dataclass(frozen=True, slots=True)
class DeliveryProvider:
    """Capability and cost record for one delivery provider."""

    id: str
    name: str
    vehicle_type: VehicleType
    description: str
    base_cost: float
    cost_per_km: float
    rating: float
    max_weight: float
    max_distance: float
    service_areas: tuple[str, ...]
    driver: DriverDetails
    vehicle: VehicleDetails
    available: bool = True
    banda_recommended: bool = False
    completed_deliveries: int = 0
    specialties: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class DeliveryZone:
    """Named fee modifier bucket."""

    code: str
    name: str
    areas: tuple[str, ...]
    base_delivery_fee: float
    free_delivery_threshold: float
    fee_multiplier: float = 1.0


@dataclass(slots=True)
class DeliveryQuote:
    provider: DeliveryProvider
    base_fee: float
    distance_fee: float
    total_fee: float
    is_free_delivery: bool
    banda_discount: float
    estimated_time: str
    eta_minutes: int


@dataclass(slots=True)
class OptimalDeliveryOption:
    provider_id: str
    provider_name: str
    vehicle_type: VehicleType
    total_fee: float
    estimated_time: str
    distance_km: float
    reason: str


@dataclass(frozen=True, slots=True)
class SellerStop:
    """A seller taking part in an order, located for distance math."""

    seller_id: str
    seller_name: str
    coordinates: GeoCoordinates
    order_value: float = 0.0


@dataclass(slots=True)
class PooledDeliveryOption:
    pool_id: str
    order_id: str
    distance_km: float
    estimated_savings: float
    wait_time_minutes: int
    pooling_type: PoolingType
    common_sellers: list[str]
    recommendation: PoolingTier


@dataclass(frozen=True, slots=True)
class TrackingUpdate:
    id: str
    timestamp: datetime
    status: DeliveryStatus
    message: str
    location: Optional[str] = None


@dataclass(slots=True)
class DeliveryOrder:
    """A delivery bound to a provider and advanced through its status lifecycle."""

    id: str
    order_id: str
    provider_id: str
    driver_name: str
    driver_phone: str
    vehicle_plate: str
    status: DeliveryStatus
    pickup_address: str
    delivery_address: str
    estimated_delivery: datetime
    delivery_fee: float
    distance: float
    tracking_updates: list[TrackingUpdate] = field(default_factory=list)
    actual_delivery: Optional[datetime] = None
    special_instructions: Optional[str] = None
