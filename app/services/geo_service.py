"""
Geospatial helpers: great-circle distance, map links and location analysis
"""
import math
from dataclasses import dataclass
from typing import Optional, Protocol

from app.schemas.location import AnalysisResult, Coordinates, MapLinks

EARTH_RADIUS_KM = 6371
UNKNOWN_LOCATION = "Unknown location"


def distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great circle distance between two points
    on the earth (specified in decimal degrees).
    Returns distance in meters rounded to centimeters.
    """
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(dlon / 2) ** 2
    )
    # Rounding can push a slightly outside [0, 1] for near-antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return round(EARTH_RADIUS_KM * c * 1000, 2)


def build_map_links(latitude: float, longitude: float) -> MapLinks:
    return MapLinks(
        google_maps=f"https://www.google.com/maps?q={latitude},{longitude}",
        apple_maps=f"https://maps.apple.com/?q={latitude},{longitude}",
        openstreetmap=f"https://www.openstreetmap.org/?mlat={latitude}&mlon={longitude}&zoom=18",
        readable_coordinates=readable_coordinates(latitude, longitude),
    )


def readable_coordinates(latitude: float, longitude: float) -> str:
    return f"{latitude:.6f}, {longitude:.6f}"


@dataclass(frozen=True)
class Classification:
    location_type: str
    accuracy_level: str
    movement_status: str


class LocationClassifier(Protocol):
    """Hook for deriving classification labels from a position"""

    def classify(self, latitude: float, longitude: float, label: Optional[str]) -> Classification:
        ...


class StaticClassifier:
    """Returns the same labels for every position"""

    def classify(self, latitude: float, longitude: float, label: Optional[str]) -> Classification:
        return Classification(
            location_type="Tracked",
            accuracy_level="High",
            movement_status="Stationary",
        )


default_classifier = StaticClassifier()


def analyze(
    latitude: float,
    longitude: float,
    label: Optional[str] = None,
    classifier: Optional[LocationClassifier] = None,
) -> AnalysisResult:
    """Bundle coordinates, place label, classification and map links for a position"""
    classification = (classifier or default_classifier).classify(latitude, longitude, label)
    return AnalysisResult(
        coordinates=Coordinates(latitude=latitude, longitude=longitude),
        address=label if label and label.strip() else UNKNOWN_LOCATION,
        location_type=classification.location_type,
        accuracy_level=classification.accuracy_level,
        movement_status=classification.movement_status,
        links=build_map_links(latitude, longitude),
    )
