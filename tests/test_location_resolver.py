"""
Tests for identifier filtering, view shaping and write/delete validation.

The store is an AsyncMock, so these tests also check which store calls are
(and are not) made.
"""
from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from app.core.config import Settings
from app.core.exceptions import CoordinatesMissing, CoordinatesOutOfRange, IdentifierMissing
from app.models import LocationReport
from app.schemas import TrackLocationRequest
from app.services import LocationResolver, LocationStore, identifier_filter


def compiled(predicate) -> str:
    return str(predicate.compile(compile_kwargs={"literal_binds": True}))


def make_report(report_id=1, **overrides) -> LocationReport:
    values = dict(
        id=report_id,
        phone_number="+15550001",
        email=None,
        latitude=28.6139,
        longitude=77.2090,
        accuracy=12.5,
        speed=None,
        address="Connaught Place",
        recorded_at=datetime(2026, 10, 1, 12, 0, 0),
    )
    values.update(overrides)
    return LocationReport(**values)


@pytest.fixture()
def store():
    return AsyncMock(spec=LocationStore)


@pytest.fixture()
def resolver(store):
    return LocationResolver(store, settings=Settings())


class TestIdentifierFilter:
    def test_phone_only(self):
        assert compiled(identifier_filter("A", None)) == "location_reports.phone_number = 'A'"

    def test_email_only(self):
        assert compiled(identifier_filter(None, "b@example.com")) == "location_reports.email = 'b@example.com'"

    def test_both_is_inclusive_or(self):
        sql = compiled(identifier_filter("A", "B"))
        assert sql == "location_reports.phone_number = 'A' OR location_reports.email = 'B'"

    def test_blank_values_count_as_missing(self):
        assert compiled(identifier_filter("  ", "B")) == "location_reports.email = 'B'"

    @pytest.mark.parametrize("phone_number,email", [(None, None), ("", ""), ("  ", None)])
    def test_neither_raises(self, phone_number, email):
        with pytest.raises(IdentifierMissing):
            identifier_filter(phone_number, email)


class TestViews:
    async def test_missing_identifier_never_touches_store(self, resolver, store):
        with pytest.raises(IdentifierMissing):
            await resolver.latest(None, None)
        with pytest.raises(IdentifierMissing):
            await resolver.history(None, "")
        with pytest.raises(IdentifierMissing):
            await resolver.stats("", None)

        assert not store.mock_calls

    async def test_latest_enriches_row(self, resolver, store):
        store.query_one.return_value = make_report()

        location, analysis = await resolver.latest("+15550001", None)

        assert location.id == 1
        assert location.readable_coords == "28.613900, 77.209000"
        assert location.maps_links.google_maps == "https://www.google.com/maps?q=28.6139,77.209"
        assert analysis.address == "Connaught Place"
        assert analysis.location_type == "Tracked"

    async def test_latest_without_rows_returns_none(self, resolver, store):
        store.query_one.return_value = None
        assert await resolver.latest("+15550001", None) is None

    async def test_history_defaults_to_fifty(self, resolver, store):
        store.query_many.return_value = []

        await resolver.history("+15550001", None)

        predicate, limit = store.query_many.call_args.args
        assert limit == 50
        assert compiled(predicate) == "location_reports.phone_number = '+15550001'"

    async def test_history_passes_limit_and_keeps_order(self, resolver, store):
        store.query_many.return_value = [make_report(3), make_report(2)]

        rows = await resolver.history(None, "a@example.com", limit=2)

        assert store.query_many.call_args.args[1] == 2
        assert [row.id for row in rows] == [3, 2]
        assert not hasattr(rows[0], "maps_links")

    async def test_stats_without_rows(self, resolver, store):
        store.aggregate.return_value = {"total": 0, "avg_accuracy": None, "min_lat": None, "max_lat": None}

        stats = await resolver.stats("+15550001", "a@example.com")

        assert stats.total == 0
        assert stats.avg_accuracy is None
        assert stats.min_lat is None
        assert stats.max_lat is None

    async def test_recent_users_uses_configured_limit(self, resolver, store):
        store.distinct_identities.return_value = [{"phone_number": "1", "email": None}]

        users = await resolver.recent_users()

        store.distinct_identities.assert_awaited_once_with(20)
        assert users[0].phone_number == "1"


class TestTrack:
    async def test_inserts_and_returns_analysis(self, resolver, store):
        store.insert.return_value = 42
        payload = TrackLocationRequest(phoneNumber="+15550001", latitude=28.6139, longitude=77.209)

        report_id, analysis = await resolver.track(payload)

        assert report_id == 42
        assert analysis.address == "Unknown location"
        report = store.insert.call_args.args[0]
        assert report.phone_number == "+15550001"
        assert report.email is None
        assert report.latitude == 28.6139

    async def test_missing_identifier(self, resolver, store):
        payload = TrackLocationRequest(latitude=1.0, longitude=2.0)
        with pytest.raises(IdentifierMissing):
            await resolver.track(payload)
        store.insert.assert_not_called()

    @pytest.mark.parametrize("coordinates", [{}, {"latitude": 1.0}, {"longitude": 2.0}])
    async def test_missing_coordinates(self, resolver, store, coordinates):
        payload = TrackLocationRequest(email="a@example.com", **coordinates)
        with pytest.raises(CoordinatesMissing):
            await resolver.track(payload)
        store.insert.assert_not_called()

    @pytest.mark.parametrize("latitude,longitude", [(90.5, 0), (-91, 0), (0, 180.1), (0, -181)])
    async def test_out_of_range_coordinates(self, resolver, store, latitude, longitude):
        payload = TrackLocationRequest(email="a@example.com", latitude=latitude, longitude=longitude)
        with pytest.raises(CoordinatesOutOfRange):
            await resolver.track(payload)
        store.insert.assert_not_called()

    async def test_range_check_can_be_disabled(self, store):
        store.insert.return_value = 1
        resolver = LocationResolver(store, settings=Settings(VALIDATE_COORDINATE_RANGE=False))
        payload = TrackLocationRequest(email="a@example.com", latitude=120.0, longitude=0.0)

        report_id, _ = await resolver.track(payload)

        assert report_id == 1
        store.insert.assert_awaited_once()


class TestDeleteAndDistance:
    async def test_delete_missing_id_is_not_an_error(self, resolver, store):
        store.delete.return_value = 0
        assert await resolver.delete(999) is None
        store.delete.assert_awaited_once_with(999)

    def test_distance(self):
        meters, kilometers = LocationResolver.distance(0, 0, 0, 1)
        assert meters == pytest.approx(111_195, abs=50)
        assert kilometers == round(meters / 1000, 3)

    def test_distance_requires_all_coordinates(self):
        with pytest.raises(CoordinatesMissing):
            LocationResolver.distance(0, 0, None, 1)
