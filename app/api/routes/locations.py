"""
Location tracking routes
"""
from datetime import datetime, timezone
from typing import Optional
from fastapi import APIRouter, Depends, Query

from app.api.deps import get_location_resolver
from app.core.config import settings
from app.schemas import (
    TrackLocationRequest, TrackLocationResponse, LatestLocationResponse,
    LocationHistoryResponse, LocationStatsResponse, DistanceRequest, DistanceResponse,
    MessageResponse
)
from app.services import LocationResolver

router = APIRouter(prefix="/location", tags=["Location Tracking"])


@router.post("/track", response_model=TrackLocationResponse)
async def track_location(
    payload: TrackLocationRequest,
    resolver: LocationResolver = Depends(get_location_resolver)
):
    """
    Store a new location report and return its analysis.
    """
    report_id, analysis = await resolver.track(payload)
    return TrackLocationResponse(
        id=report_id,
        analysis=analysis,
        timestamp=datetime.now(timezone.utc)
    )


@router.get("/latest", response_model=LatestLocationResponse)
async def get_latest_location(
    phone_number: Optional[str] = Query(None, alias="phoneNumber"),
    email: Optional[str] = None,
    resolver: LocationResolver = Depends(get_location_resolver)
):
    """
    Get the most recent location for a phone number and/or email.
    """
    latest = await resolver.latest(phone_number, email)
    if latest is None:
        return LatestLocationResponse(location=None, message="No location found")

    location, analysis = latest
    return LatestLocationResponse(location=location, analysis=analysis)


@router.get("/history", response_model=LocationHistoryResponse)
async def get_location_history(
    phone_number: Optional[str] = Query(None, alias="phoneNumber"),
    email: Optional[str] = None,
    limit: int = Query(settings.HISTORY_DEFAULT_LIMIT, ge=1, le=settings.HISTORY_MAX_LIMIT),
    resolver: LocationResolver = Depends(get_location_resolver)
):
    """
    Get location history, newest first.
    """
    locations = await resolver.history(phone_number, email, limit)
    return LocationHistoryResponse(count=len(locations), locations=locations)


@router.get("/stats", response_model=LocationStatsResponse)
async def get_location_stats(
    phone_number: Optional[str] = Query(None, alias="phoneNumber"),
    email: Optional[str] = None,
    resolver: LocationResolver = Depends(get_location_resolver)
):
    """
    Get report count, average accuracy and latitude range.
    """
    statistics = await resolver.stats(phone_number, email)
    return LocationStatsResponse(statistics=statistics)


@router.post("/distance", response_model=DistanceResponse)
async def calculate_distance(payload: DistanceRequest):
    """
    Great circle distance between two positions.
    """
    meters, kilometers = LocationResolver.distance(
        payload.lat1, payload.lon1, payload.lat2, payload.lon2
    )
    return DistanceResponse(distance_meters=meters, distance_km=kilometers)


@router.delete("/delete/{report_id}", response_model=MessageResponse)
async def delete_location(
    report_id: int,
    resolver: LocationResolver = Depends(get_location_resolver)
):
    """
    Delete a location report.
    """
    await resolver.delete(report_id)
    return MessageResponse(message="Location deleted successfully")
