"""Reverse geocoding service backed by the boundary dataset.

This module ties the boundary store to the point locator and shapes the
result like a Google Geocoding API response:
- A point inside an area resolves to that area's name and place id
- A point outside every area resolves to a configurable fallback location
- Dataset problems never surface as errors, only as the fallback
"""

from area_geocoder.core.config import Settings, settings
from area_geocoder.core.events import LOOKUPS_TOTAL
from area_geocoder.core.geocoding.boundaries import (
    BoundaryStore,
    create_boundary_store,
)
from area_geocoder.core.geocoding.locator import find_area
from area_geocoder.core.logging import get_logger
from area_geocoder.models.geocode import (
    AddressComponent,
    GeocodeResponse,
    GeocodeResult,
    LatLng,
    ResultGeometry,
)
from area_geocoder.models.geographic import AreaMatch

logger = get_logger()


class GeocodingService:
    """Resolve coordinates to named areas."""

    def __init__(
        self,
        store: BoundaryStore,
        locality_name: str = "Dire Dawa",
        fallback_name: str = "Dire Dawa",
        fallback_place_id: str = "unknown",
    ) -> None:
        """Initialize the service.

        Args:
            store: Source of the boundary dataset, loaded on every lookup
            locality_name: Appended to a matched area's long name
            fallback_name: Location name used when no area matches
            fallback_place_id: Place id used when no area matches
        """
        self.store = store
        self.locality_name = locality_name
        self.fallback_name = fallback_name
        self.fallback_place_id = fallback_place_id

    @classmethod
    def from_settings(cls, config: Settings) -> "GeocodingService":
        """Build a service from application settings."""
        return cls(
            store=create_boundary_store(config),
            locality_name=config.LOCALITY_NAME,
            fallback_name=config.FALLBACK_NAME,
            fallback_place_id=config.FALLBACK_PLACE_ID,
        )

    def locate(self, lng: float, lat: float) -> AreaMatch:
        """Find the area containing a point.

        Args:
            lng: Longitude
            lat: Latitude

        Returns:
            The first matching area in dataset order, or the empty
            ``AreaMatch`` when no area contains the point
        """
        regions = self.store.load()
        match = find_area(lng, lat, regions)

        LOOKUPS_TOTAL.labels(outcome="match" if match.matched else "no_match").inc()
        logger.debug(
            "area_lookup",
            lng=lng,
            lat=lat,
            regions=len(regions),
            area=match.name or None,
        )
        return match

    def reverse_geocode(self, lat: float, lng: float) -> GeocodeResponse:
        """Build a geocoding response for a point.

        Args:
            lat: Latitude
            lng: Longitude

        Returns:
            Response with a single locality result
        """
        match = self.locate(lng, lat)
        if match.matched:
            component = AddressComponent(
                long_name=f"{match.name}, {self.locality_name}",
                short_name=match.name,
            )
            formatted_address = match.name
            place_id = match.id
        else:
            component = AddressComponent(
                long_name=self.fallback_name,
                short_name=self.fallback_name,
            )
            formatted_address = self.fallback_name
            place_id = self.fallback_place_id

        result = GeocodeResult(
            address_components=[component],
            formatted_address=formatted_address,
            geometry=ResultGeometry(location=LatLng(lat=lat, lng=lng)),
            place_id=place_id,
        )
        return GeocodeResponse(results=[result])


# Singleton instance
_geocoding_service: GeocodingService | None = None


def get_geocoding_service() -> GeocodingService:
    """Get or create the singleton geocoding service instance.

    Returns:
        GeocodingService instance
    """
    global _geocoding_service
    if _geocoding_service is None:
        _geocoding_service = GeocodingService.from_settings(settings)
    return _geocoding_service
