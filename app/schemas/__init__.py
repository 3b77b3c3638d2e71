"""
Pydantic schemas package
"""
from app.schemas.location import (
    MapLinks, Coordinates, AnalysisResult, TrackLocationRequest, DistanceRequest,
    LocationReportResponse, EnrichedLocationResponse, LocationStats, UserIdentity,
    TrackLocationResponse, LatestLocationResponse, LocationHistoryResponse,
    LocationStatsResponse, DistanceResponse, UserListResponse, MessageResponse,
    ErrorResponse
)

__all__ = [
    "MapLinks", "Coordinates", "AnalysisResult", "TrackLocationRequest", "DistanceRequest",
    "LocationReportResponse", "EnrichedLocationResponse", "LocationStats", "UserIdentity",
    "TrackLocationResponse", "LatestLocationResponse", "LocationHistoryResponse",
    "LocationStatsResponse", "DistanceResponse", "UserListResponse", "MessageResponse",
    "ErrorResponse",
]
