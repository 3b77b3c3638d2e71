"""
Services package
"""
from app.services.location_store import LocationStore
from app.services.location_resolver import LocationResolver, identifier_filter

__all__ = [
    "LocationStore",
    "LocationResolver",
    "identifier_filter",
]
