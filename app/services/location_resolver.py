"""
Turns identifier filters and requested views into store queries and shapes the results
"""
import logging
from typing import List, Optional, Tuple
from sqlalchemy import or_
from sqlalchemy.sql import ColumnElement

from app.core.config import Settings, settings as default_settings
from app.core.exceptions import CoordinatesMissing, CoordinatesOutOfRange, IdentifierMissing
from app.models import LocationReport
from app.schemas.location import (
    AnalysisResult, EnrichedLocationResponse, LocationReportResponse, LocationStats,
    TrackLocationRequest, UserIdentity
)
from app.services.geo_service import (
    LocationClassifier, analyze, build_map_links, distance_meters, readable_coordinates
)
from app.services.location_store import LocationStore

logger = logging.getLogger(__name__)


def _present(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def identifier_filter(phone_number: Optional[str], email: Optional[str]) -> ColumnElement:
    """
    Build the row predicate for an identifier pair.
    When both parts are given a row matching either one is selected.
    """
    phone_number = _present(phone_number)
    email = _present(email)

    if phone_number and email:
        return or_(LocationReport.phone_number == phone_number, LocationReport.email == email)
    if phone_number:
        return LocationReport.phone_number == phone_number
    if email:
        return LocationReport.email == email
    raise IdentifierMissing()


def validate_coordinates(latitude: Optional[float], longitude: Optional[float], check_range: bool = True):
    if latitude is None or longitude is None:
        raise CoordinatesMissing()
    if check_range and not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
        raise CoordinatesOutOfRange()


class LocationResolver:
    def __init__(
        self,
        store: LocationStore,
        settings: Settings = default_settings,
        classifier: Optional[LocationClassifier] = None
    ):
        self.store = store
        self.settings = settings
        self.classifier = classifier

    async def track(self, payload: TrackLocationRequest) -> Tuple[int, AnalysisResult]:
        phone_number = _present(payload.phone_number)
        email = _present(payload.email)
        if not phone_number and not email:
            raise IdentifierMissing()
        validate_coordinates(
            payload.latitude, payload.longitude,
            check_range=self.settings.VALIDATE_COORDINATE_RANGE
        )

        report = LocationReport(
            phone_number=phone_number,
            email=email,
            latitude=payload.latitude,
            longitude=payload.longitude,
            address=_present(payload.address),
            accuracy=payload.accuracy,
            speed=payload.speed
        )
        report_id = await self.store.insert(report)
        logger.info(f"Location {report_id} tracked for {phone_number or email}")

        analysis = analyze(payload.latitude, payload.longitude, payload.address, self.classifier)
        return report_id, analysis

    async def latest(
        self,
        phone_number: Optional[str],
        email: Optional[str]
    ) -> Optional[Tuple[EnrichedLocationResponse, AnalysisResult]]:
        predicate = identifier_filter(phone_number, email)
        row = await self.store.query_one(predicate)
        if row is None:
            return None

        location = EnrichedLocationResponse(
            **LocationReportResponse.model_validate(row).model_dump(),
            maps_links=build_map_links(row.latitude, row.longitude),
            readable_coords=readable_coordinates(row.latitude, row.longitude)
        )
        return location, analyze(row.latitude, row.longitude, row.address, self.classifier)

    async def history(
        self,
        phone_number: Optional[str],
        email: Optional[str],
        limit: Optional[int] = None
    ) -> List[LocationReportResponse]:
        predicate = identifier_filter(phone_number, email)
        if limit is None:
            limit = self.settings.HISTORY_DEFAULT_LIMIT
        rows = await self.store.query_many(predicate, limit)
        return [LocationReportResponse.model_validate(row) for row in rows]

    async def stats(self, phone_number: Optional[str], email: Optional[str]) -> LocationStats:
        predicate = identifier_filter(phone_number, email)
        return LocationStats(**await self.store.aggregate(predicate))

    async def recent_users(self, limit: Optional[int] = None) -> List[UserIdentity]:
        identities = await self.store.distinct_identities(limit or self.settings.RECENT_USERS_LIMIT)
        return [UserIdentity(**identity) for identity in identities]

    async def delete(self, report_id: int) -> None:
        # Missing ids are not reported back to the caller
        deleted = await self.store.delete(report_id)
        logger.info(f"Delete location {report_id}: {deleted} row(s) removed")

    @staticmethod
    def distance(
        lat1: Optional[float],
        lon1: Optional[float],
        lat2: Optional[float],
        lon2: Optional[float]
    ) -> Tuple[float, float]:
        """Return (meters, kilometers) between two positions"""
        if None in (lat1, lon1, lat2, lon2):
            raise CoordinatesMissing("All coordinates are required")
        meters = distance_meters(lat1, lon1, lat2, lon2)
        return meters, round(meters / 1000, 3)
