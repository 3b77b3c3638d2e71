"""
Pydantic schemas for Location API
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class MapLinks(BaseModel):
    google_maps: str
    apple_maps: str
    openstreetmap: str
    readable_coordinates: str


class Coordinates(BaseModel):
    latitude: float
    longitude: float


class AnalysisResult(BaseModel):
    coordinates: Coordinates
    address: str
    location_type: str
    accuracy_level: str
    movement_status: str
    links: MapLinks


class TrackLocationRequest(BaseModel):
    """Inbound report; presence checks happen in the resolver so they share its error types"""
    model_config = ConfigDict(populate_by_name=True)

    phone_number: Optional[str] = Field(None, alias="phoneNumber")
    email: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    address: Optional[str] = None
    accuracy: Optional[float] = None
    speed: Optional[float] = None


class DistanceRequest(BaseModel):
    lat1: Optional[float] = None
    lon1: Optional[float] = None
    lat2: Optional[float] = None
    lon2: Optional[float] = None


class LocationReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    phone_number: Optional[str] = None
    email: Optional[str] = None
    latitude: float
    longitude: float
    accuracy: Optional[float] = None
    speed: Optional[float] = None
    address: Optional[str] = None
    recorded_at: datetime


class EnrichedLocationResponse(LocationReportResponse):
    maps_links: MapLinks
    readable_coords: str


class LocationStats(BaseModel):
    total: int = 0
    avg_accuracy: Optional[float] = None
    min_lat: Optional[float] = None
    max_lat: Optional[float] = None


class UserIdentity(BaseModel):
    phone_number: Optional[str] = None
    email: Optional[str] = None


class TrackLocationResponse(BaseModel):
    success: bool = True
    message: str = "Location tracked successfully"
    id: int
    analysis: AnalysisResult
    timestamp: datetime


class LatestLocationResponse(BaseModel):
    success: bool = True
    location: Optional[EnrichedLocationResponse] = None
    analysis: Optional[AnalysisResult] = None
    message: Optional[str] = None


class LocationHistoryResponse(BaseModel):
    success: bool = True
    count: int
    locations: list[LocationReportResponse]


class LocationStatsResponse(BaseModel):
    success: bool = True
    statistics: LocationStats


class DistanceResponse(BaseModel):
    success: bool = True
    distance_meters: float
    distance_km: float


class UserListResponse(BaseModel):
    success: bool = True
    users: list[UserIdentity]


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
