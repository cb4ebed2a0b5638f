"""Area geocoding package.

This package provides:
- Boundary dataset loading with per-feature validation
- Ray casting point-in-area lookup
- The reverse geocoding service used by the HTTP layer
"""

from area_geocoder.core.geocoding.boundaries import (
    BoundaryLoadError,
    BoundaryStore,
    CachedBoundaryStore,
    MalformedResourceError,
    ResourceUnavailableError,
    create_boundary_store,
    parse_dataset,
)
from area_geocoder.core.geocoding.locator import find_area, point_in_ring
from area_geocoder.core.geocoding.service import (
    GeocodingService,
    get_geocoding_service,
)

__all__ = [
    "BoundaryLoadError",
    "BoundaryStore",
    "CachedBoundaryStore",
    "GeocodingService",
    "MalformedResourceError",
    "ResourceUnavailableError",
    "create_boundary_store",
    "find_area",
    "get_geocoding_service",
    "parse_dataset",
    "point_in_ring",
]
