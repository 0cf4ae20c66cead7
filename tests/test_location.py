import asyncio
from datetime import datetime, timezone

import pytest

from src.agridelivery.errors import LocationResolutionError, PersistenceError
from src.agridelivery.models.domain import GeoCoordinates, UserLocation
from src.agridelivery.persistence import MemoryStore, StorageKeys
from src.agridelivery.services.location import (
    COUNTIES,
    LocationEvents,
    LocationSession,
    StaticGeolocationProvider,
    find_county,
)

NOW = datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)
NAIROBI = GeoCoordinates(lat=-1.2921, lng=36.8219)


def _session(store=None, provider=None) -> LocationSession:
    return LocationSession(
        store or MemoryStore(),
        provider or StaticGeolocationProvider(NAIROBI),
        clock=lambda: NOW,
    )


class SlowStore(MemoryStore):
    def __init__(self) -> None:
        super().__init__()
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def set_item(self, key: str, value: str) -> None:
        self.started.set()
        await self.release.wait()
        await super().set_item(key, value)


class FailingStore(MemoryStore):
    async def set_item(self, key: str, value: str) -> None:
        raise PersistenceError("quota exceeded")


def test_current_location_is_persisted_and_broadcast():
    store = MemoryStore()
    session = _session(store)
    received = []
    session.subscribe(received.append)

    location = asyncio.run(session.get_current_location())

    assert location.coordinates == NAIROBI
    assert location.label == "Current Location"
    assert location.timestamp == NOW
    assert session.current == location
    assert session.last_error is None
    assert session.permission_granted
    assert received == [location]
    assert asyncio.run(store.get_item(StorageKeys.LOCATION)) is not None


def test_permission_denied_returns_none_with_reason():
    session = _session(provider=StaticGeolocationProvider(NAIROBI, permission_granted=False))
    received = []
    session.subscribe(received.append)

    assert asyncio.run(session.get_current_location()) is None
    assert session.current is None
    assert "enable location services" in session.last_error
    assert received == []
    assert not session.is_loading


def test_unavailable_position_returns_none():
    session = _session(provider=StaticGeolocationProvider(None))

    assert asyncio.run(session.get_current_location()) is None
    assert session.last_error == "No position available"


def test_manual_location_resolves_county_coordinates():
    session = _session()

    location = asyncio.run(session.set_manual_location(UserLocation(county_id="022", label="Farm gate")))

    assert location.coordinates == GeoCoordinates(lat=-1.1714, lng=36.8356)
    assert location.county == "Kiambu"
    assert location.timestamp == NOW
    assert session.current == location


def test_manual_location_resolves_from_ward_or_name():
    session = _session()

    by_ward = asyncio.run(session.set_manual_location(UserLocation(ward_id="047-01-02")))
    by_name = asyncio.run(session.set_manual_location(UserLocation(county="nakuru")))

    assert by_ward.county == "Nairobi"
    assert by_ward.county_id == "047"
    assert by_name.coordinates == GeoCoordinates(lat=-0.3031, lng=36.0800)


def test_manual_location_without_coordinates_is_rejected():
    session = _session()
    asyncio.run(session.get_current_location())
    before = session.current

    with pytest.raises(LocationResolutionError):
        asyncio.run(session.set_manual_location(UserLocation(label="Somewhere", city="Unknown")))
    with pytest.raises(LocationResolutionError):
        asyncio.run(session.set_manual_location(UserLocation(coordinates=GeoCoordinates(lat=200, lng=0))))
    assert session.current == before


def test_saved_location_is_restored():
    store = MemoryStore()
    asyncio.run(_session(store).set_manual_location(UserLocation(county_id="032", city="Nakuru")))

    fresh = _session(store)
    restored = asyncio.run(fresh.load_saved_location())

    assert restored.city == "Nakuru"
    assert restored.timestamp == NOW
    assert fresh.current == restored


def test_store_failure_still_updates_session():
    session = _session(FailingStore())

    location = asyncio.run(session.get_current_location())

    assert session.current == location


def test_listeners_get_changes_in_order_and_can_unsubscribe():
    session = _session()
    first, second = [], []

    def broken(_location):
        raise RuntimeError("listener bug")

    session.subscribe(broken)
    unsubscribe = session.subscribe(lambda location: first.append(location.county))
    session.subscribe(lambda location: second.append(location.county))

    asyncio.run(session.set_manual_location(UserLocation(county_id="001")))
    unsubscribe()
    asyncio.run(session.set_manual_location(UserLocation(county_id="042")))

    assert first == ["Mombasa"]
    assert second == ["Mombasa", "Kisumu"]


def test_cancel_before_fix_leaves_session_untouched():
    async def scenario():
        session = _session(provider=StaticGeolocationProvider(NAIROBI, delay_seconds=10))
        task = asyncio.create_task(session.get_current_location())
        await asyncio.sleep(0.01)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        return session

    session = asyncio.run(scenario())

    assert session.current is None


def test_cancel_during_commit_still_completes_update():
    async def scenario():
        store = SlowStore()
        session = _session(store)
        published = asyncio.Event()
        session.subscribe(lambda _location: published.set())

        task = asyncio.create_task(session.get_current_location())
        await store.started.wait()
        task.cancel()
        store.release.set()
        with pytest.raises(asyncio.CancelledError):
            await task
        await asyncio.wait_for(published.wait(), timeout=1)
        return session, store

    session, store = asyncio.run(scenario())

    assert session.current.coordinates == NAIROBI
    assert asyncio.run(store.get_item(StorageKeys.LOCATION)) is not None


def test_events_channel_is_independent_per_session():
    events = LocationEvents()
    received = []
    events.subscribe(received.append)

    events.publish(None)

    assert received == [None]
    assert events.listener_count == 1
    assert _session().events.listener_count == 0


def test_county_table_lookup():
    assert len(COUNTIES) == 47
    assert find_county("047").name == "Nairobi"
    assert find_county("Murang'a").id == "021"
    assert find_county("022-03").name == "Kiambu"
    assert find_county("Atlantis") is None
    assert find_county(None) is None
