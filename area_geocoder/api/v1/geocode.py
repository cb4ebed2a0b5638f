"""Reverse geocoding endpoint.

Served both at the root path, where existing clients send ``?lat=&lng=``, and
at the Google Geocoding API path so the service can stand in for it.
"""

import math

from fastapi import APIRouter, Depends, HTTPException, Query
from starlette.status import HTTP_400_BAD_REQUEST

from area_geocoder.core.geocoding.service import (
    GeocodingService,
    get_geocoding_service,
)
from area_geocoder.models.geocode import GeocodeResponse

router = APIRouter(tags=["geocode"])


def _parse_float(value: str, name: str) -> float:
    try:
        number = float(value)
    except ValueError:
        number = math.nan
    # nan and inf cannot be echoed back in a JSON response
    if not math.isfinite(number):
        raise HTTPException(
            status_code=HTTP_400_BAD_REQUEST, detail=f"Invalid {name} parameter"
        )
    return number


def parse_coordinates(
    lat: str | None, lng: str | None, latlng: str | None = None
) -> tuple[float, float]:
    """Parse the request coordinates.

    Args:
        lat: Latitude parameter
        lng: Longitude parameter
        latlng: Combined ``<lat>,<lng>`` parameter, used when both
            ``lat`` and ``lng`` are absent

    Returns:
        Tuple of (latitude, longitude)

    Raises:
        HTTPException: 400 when parameters are missing or unparseable
    """
    if not lat and not lng and latlng:
        parts = latlng.split(",")
        if len(parts) != 2:
            raise HTTPException(
                status_code=HTTP_400_BAD_REQUEST, detail="Invalid latlng parameter"
            )
        return _parse_float(parts[0], "latlng"), _parse_float(parts[1], "latlng")

    if not lat or not lng:
        raise HTTPException(
            status_code=HTTP_400_BAD_REQUEST, detail="Missing lat or lng parameters"
        )

    return _parse_float(lat, "lat"), _parse_float(lng, "lng")


@router.get("/", response_model=GeocodeResponse, include_in_schema=False)
@router.get("/maps/api/geocode/json", response_model=GeocodeResponse)
def reverse_geocode(
    lat: str | None = Query(None, description="Latitude", examples=["9.62"]),
    lng: str | None = Query(None, description="Longitude", examples=["41.85"]),
    latlng: str | None = Query(
        None, description="Latitude and longitude as '<lat>,<lng>'"
    ),
    service: GeocodingService = Depends(get_geocoding_service),
) -> GeocodeResponse:
    """
    Resolve a coordinate to the administrative area containing it.

    Points outside every known area resolve to the configured fallback
    location rather than an error.
    """
    latitude, longitude = parse_coordinates(lat, lng, latlng)
    return service.reverse_geocode(latitude, longitude)
