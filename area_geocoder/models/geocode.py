"""Response models mirroring the Google Geocoding API."""

from pydantic import BaseModel, ConfigDict, Field

LOCALITY_TYPES = ["locality", "political"]


class AddressComponent(BaseModel):
    """One component of a formatted address."""

    long_name: str = Field(..., examples=["Sabian, Dire Dawa"])
    short_name: str = Field(..., examples=["Sabian"])
    types: list[str] = Field(default_factory=lambda: list(LOCALITY_TYPES))


class LatLng(BaseModel):
    """Point echoed back to the caller."""

    lat: float
    lng: float


class ResultGeometry(BaseModel):
    """Geometry block of a geocoding result."""

    location: LatLng
    location_type: str = "APPROXIMATE"


class GeocodeResult(BaseModel):
    """A single geocoding result."""

    address_components: list[AddressComponent]
    formatted_address: str
    geometry: ResultGeometry
    place_id: str
    types: list[str] = Field(default_factory=lambda: list(LOCALITY_TYPES))


class GeocodeResponse(BaseModel):
    """Envelope returned by the geocode endpoint."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "results": [
                    {
                        "address_components": [
                            {
                                "long_name": "Sabian, Dire Dawa",
                                "short_name": "Sabian",
                                "types": ["locality", "political"],
                            }
                        ],
                        "formatted_address": "Sabian",
                        "geometry": {
                            "location": {"lat": 9.62, "lng": 41.85},
                            "location_type": "APPROXIMATE",
                        },
                        "place_id": "area-1",
                        "types": ["locality", "political"],
                    }
                ],
                "status": "OK",
            }
        }
    )

    results: list[GeocodeResult]
    status: str = "OK"
