"""Geographic and response models package."""

from .geocode import (
    AddressComponent,
    GeocodeResponse,
    GeocodeResult,
    LatLng,
    ResultGeometry,
)
from .geographic import (
    NO_MATCH,
    AreaMatch,
    Coordinate,
    Feature,
    FeatureCollection,
    Region,
)

__all__ = [
    "AddressComponent",
    "AreaMatch",
    "Coordinate",
    "Feature",
    "FeatureCollection",
    "GeocodeResponse",
    "GeocodeResult",
    "LatLng",
    "NO_MATCH",
    "Region",
    "ResultGeometry",
]
