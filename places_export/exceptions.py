"""Custom exceptions for the places export pipeline."""


class PlacesExportError(Exception):
    """Base exception for all places export errors."""
    status_code = 500


class InvalidInput(PlacesExportError):
    """Raised when the service type or location is missing."""
    status_code = 400


class Misconfigured(PlacesExportError):
    """Raised when the Google Maps API key is not configured."""
    status_code = 500


class UpstreamError(PlacesExportError):
    """Raised when a Google Maps API call fails or returns a bad status."""

    def __init__(self, message: str, status: str = None):
        super().__init__(message)
        self.status = status


class LocationNotFound(UpstreamError):
    """Raised when a location cannot be geocoded."""
    pass
