"""
Error types raised by the location services
"""
from fastapi import status


class LocationTrackerError(Exception):
    """Base error; the message is safe to return to clients"""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "An internal error occurred"

    def __init__(self, message: str = None):
        self.message = message or self.message
        super().__init__(self.message)


class ValidationFailed(LocationTrackerError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class IdentifierMissing(ValidationFailed):
    message = "Phone number or email is required"


class CoordinatesMissing(ValidationFailed):
    message = "Latitude and longitude are required"


class CoordinatesOutOfRange(ValidationFailed):
    message = "Latitude must be within [-90, 90] and longitude within [-180, 180]"


class StoreUnavailable(LocationTrackerError):
    message = "Location store is unavailable"
