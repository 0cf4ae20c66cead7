import asyncio

import httpx
import pytest

from src.agridelivery.errors import GeolocationUnavailableError, PermissionDeniedError
from src.agridelivery.models.domain import GeoCoordinates
from src.agridelivery.persistence import MemoryStore
from src.agridelivery.services.location import HttpGeolocationProvider, LocationSession
from src.agridelivery.services.location.geolocation import parse_position

URL = "http://geo.test/position"


def _provider(handler, **kwargs) -> HttpGeolocationProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    kwargs.setdefault("backoff_seconds", 0)
    return HttpGeolocationProvider(URL, client=client, **kwargs)


def test_reads_latitude_longitude_payload():
    provider = _provider(lambda request: httpx.Response(200, json={"latitude": -1.2921, "longitude": 36.8219}))

    assert asyncio.run(provider.current_position()) == GeoCoordinates(lat=-1.2921, lng=36.8219)


def test_accepts_nested_coords_and_short_keys():
    assert parse_position({"coords": {"lat": "0.5", "lon": 35.27}}) == GeoCoordinates(lat=0.5, lng=35.27)
    with pytest.raises(GeolocationUnavailableError):
        parse_position({"lat": 95, "lng": 0})
    with pytest.raises(GeolocationUnavailableError):
        parse_position({"city": "Nairobi"})
    with pytest.raises(GeolocationUnavailableError):
        parse_position([1, 2])


def test_forbidden_response_is_permission_denial():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(403)

    provider = _provider(handler, max_retries=3)

    with pytest.raises(PermissionDeniedError):
        asyncio.run(provider.current_position())
    assert len(calls) == 1
    assert asyncio.run(provider.request_permission()) is False


def test_transient_errors_are_retried_up_to_cap():
    responses = [httpx.Response(503), httpx.Response(503), httpx.Response(200, json={"lat": -0.09, "lng": 34.77})]
    calls = []

    def handler(request):
        calls.append(request)
        return responses[len(calls) - 1]

    provider = _provider(handler, max_retries=2)

    assert asyncio.run(provider.current_position()) == GeoCoordinates(lat=-0.09, lng=34.77)
    assert len(calls) == 3


def test_gives_up_after_retries():
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    provider = _provider(handler, max_retries=1)

    with pytest.raises(GeolocationUnavailableError):
        asyncio.run(provider.current_position())
    assert len(calls) == 2


def test_no_retry_by_default():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(500)

    provider = _provider(handler, max_retries=0)

    with pytest.raises(GeolocationUnavailableError):
        asyncio.run(provider.current_position())
    assert len(calls) == 1


def test_invalid_json_is_unavailable():
    provider = _provider(lambda request: httpx.Response(200, content=b"<html>oops</html>"))

    with pytest.raises(GeolocationUnavailableError):
        asyncio.run(provider.current_position())


def test_requires_configured_url(monkeypatch):
    from src.agridelivery.services.location import geolocation

    monkeypatch.setattr(geolocation.settings, "geolocation_url", None)

    with pytest.raises(ValueError):
        HttpGeolocationProvider()


def test_session_degrades_when_endpoint_refuses():
    provider = _provider(lambda request: httpx.Response(401))
    session = LocationSession(MemoryStore(), provider)

    assert asyncio.run(session.get_current_location()) is None
    assert "refused access" in session.last_error


@pytest.mark.parametrize("status_code", [404, 422])
def test_client_errors_are_not_retried(status_code):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(status_code)

    provider = _provider(handler, max_retries=3)

    with pytest.raises(GeolocationUnavailableError):
        asyncio.run(provider.current_position())
    assert len(calls) == 1
    assert asyncio.run(provider.request_permission()) is True
