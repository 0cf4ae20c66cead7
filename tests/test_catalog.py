from dataclasses import replace

import pytest

from src.agridelivery.errors import InvalidInputError
from src.agridelivery.services.catalog import (
    DELIVERY_PROVIDERS,
    ExactAreaMatcher,
    SubstringAreaMatcher,
    get_available_providers,
    get_provider,
    get_zone,
    zone_for_area,
)


def test_overweight_order_excludes_provider():
    limited = replace(get_provider("bdp-002"), max_weight=500)

    result = get_available_providers(600, 5, "Nairobi", providers=[limited])

    assert result == []


def test_eligible_providers_respect_weight_and_distance_limits():
    for weight in (0, 10, 30, 900, 2000, 4000, 6000):
        for km in (0, 5, 20, 60, 120, 180, 250):
            for provider in get_available_providers(weight, km, "Nairobi"):
                assert provider.max_weight >= weight
                assert provider.max_distance >= km


def test_ranking_puts_recommended_then_rating_then_cost():
    ids = [provider.id for provider in get_available_providers(10, 5, "Nairobi")]

    assert ids == ["bdp-001", "bdp-005", "bdp-002", "bdp-003", "bdp-004", "bdp-006"]


def test_area_filter_keeps_only_serving_providers():
    ids = [provider.id for provider in get_available_providers(10, 5, "Eldoret")]

    assert ids == ["bdp-005", "bdp-003", "bdp-004"]


def test_unknown_area_is_empty_not_error():
    assert get_available_providers(10, 5, "Atlantis") == []


def test_unavailable_providers_are_skipped():
    providers = [replace(get_provider("bdp-001"), available=False), get_provider("bdp-002")]

    ids = [provider.id for provider in get_available_providers(10, 5, "Nairobi", providers=providers)]

    assert ids == ["bdp-002"]


def test_substring_matcher_matches_either_direction():
    matcher = SubstringAreaMatcher()

    assert matcher.matches("Nairobi West", ["Nairobi"])
    assert matcher.matches("kiam", ["Kiambu"])
    assert not matcher.matches("", ["Nairobi"])
    assert not matcher.matches("Kisumu", ["Nairobi", "Kiambu"])


def test_exact_matcher_can_replace_substring_matching():
    providers = get_available_providers(10, 5, "Nairobi West", matcher=ExactAreaMatcher())
    assert providers == []

    providers = get_available_providers(10, 5, " nairobi ", matcher=ExactAreaMatcher())
    assert len(providers) == len(DELIVERY_PROVIDERS)


@pytest.mark.parametrize("weight,km", [(-1, 5), (5, -1), (float("nan"), 5)])
def test_negative_or_nan_request_is_rejected(weight, km):
    with pytest.raises(InvalidInputError):
        get_available_providers(weight, km, "Nairobi")


def test_zone_and_provider_lookup():
    assert get_zone("zone_2").fee_multiplier == 1.2
    assert zone_for_area("kiambu").code == "ZONE_2"
    assert zone_for_area("Atlantis") is None

    with pytest.raises(InvalidInputError):
        get_zone("ZONE_9")
    with pytest.raises(InvalidInputError):
        get_provider("bdp-999")
