"""Point-in-area reverse geocoder with Google Geocoding API responses."""

__version__ = "0.1.0"
