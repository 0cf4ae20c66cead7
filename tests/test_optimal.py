from src.agridelivery.models.domain import GeoCoordinates, SellerStop, UserLocation
from src.agridelivery.services.geospatial import delivery_fee, distance, round_half_up
from src.agridelivery.services.quoting import get_optimal_delivery_option
from src.agridelivery.services.quoting.optimal import choose_vehicle

BUYER = GeoCoordinates(lat=-1.2921, lng=36.8219)
NEAR = GeoCoordinates(lat=-1.3, lng=36.82)
KIAMBU = GeoCoordinates(lat=-1.1714, lng=36.8356)
NAKURU = GeoCoordinates(lat=-0.3031, lng=36.0800)


def _seller(sid: str, coordinates: GeoCoordinates, value: float) -> SellerStop:
    return SellerStop(seller_id=sid, seller_name=f"Seller {sid}", coordinates=coordinates, order_value=value)


def test_small_nearby_order_goes_by_boda():
    option = get_optimal_delivery_option([_seller("s1", NEAR, 1500)], UserLocation(coordinates=BUYER))

    assert option.vehicle_type == "boda"
    assert option.provider_id == "provider-boda-optimal"
    assert option.provider_name == "TradeGuard Boda"
    assert option.total_fee == 100
    assert option.estimated_time == "2 mins"
    assert option.distance_km < 1


def test_many_sellers_with_large_value_need_truck():
    sellers = [_seller(f"s{i}", NEAR, 3750) for i in range(4)]

    option = get_optimal_delivery_option(sellers, BUYER)

    assert option.vehicle_type == "truck"
    assert option.total_fee == 720
    assert option.reason == "Large order requires truck capacity"


def test_boda_rule_is_checked_before_seller_count():
    sellers = [_seller(f"s{i}", NEAR, 250) for i in range(4)]

    assert get_optimal_delivery_option(sellers, BUYER).vehicle_type == "boda"


def test_long_distance_uses_pickup_and_mid_range_uses_van():
    assert get_optimal_delivery_option([_seller("s1", NAKURU, 5000)], BUYER).vehicle_type == "pickup"

    option = get_optimal_delivery_option([_seller("s1", KIAMBU, 5000)], BUYER)
    assert option.vehicle_type == "van"
    assert option.total_fee == round_half_up(delivery_fee(distance(BUYER, KIAMBU)) * 1.3)


def test_missing_inputs_return_none():
    sellers = [_seller("s1", NEAR, 1500)]

    assert get_optimal_delivery_option([], BUYER) is None
    assert get_optimal_delivery_option(sellers, None) is None
    assert get_optimal_delivery_option(sellers, UserLocation(county="Kiambu")) is None


def test_choose_vehicle_rule_order():
    assert choose_vehicle(5, 1000, 1)[0] == "boda"
    assert choose_vehicle(60, 1000, 1)[0] == "pickup"
    assert choose_vehicle(60, 12000, 1)[0] == "truck"
    assert choose_vehicle(20, 5000, 2)[0] == "van"
