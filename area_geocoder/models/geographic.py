"""Geographic models for boundary datasets and area lookups."""

from typing import Annotated, Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Coordinate(NamedTuple):
    """A (longitude, latitude) vertex. Ranges are not enforced."""

    lng: float
    lat: float


class AreaMatch(NamedTuple):
    """Name and id of the area containing a point.

    Both fields are empty strings when no area contains the point.
    """

    name: str
    id: str

    @property
    def matched(self) -> bool:
        """Whether this is a real match rather than the no-match sentinel."""
        return self.name != ""


NO_MATCH = AreaMatch(name="", id="")


class Region(BaseModel):
    """Named polygonal area, the unit of lookup result."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Display label")
    id: str = Field(default="", description="Opaque place identifier")
    boundary: tuple[Coordinate, ...] = Field(
        default=(),
        description="Outer ring of the polygon, first ring of the source geometry",
    )

    @property
    def is_degenerate(self) -> bool:
        """Whether the boundary has too few vertices to enclose anything."""
        return len(self.boundary) < 3


# GeoJSON positions may carry an altitude after longitude and latitude
Position = Annotated[list[float], Field(min_length=2)]


class FeatureProperties(BaseModel):
    """Feature properties; only ``name`` is required."""

    model_config = ConfigDict(extra="allow")

    name: str
    id: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        """Accept numeric ids and treat null as absent."""
        if value is None:
            return ""
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value


class PolygonGeometry(BaseModel):
    """Geometry whose coordinates are a list of rings."""

    type: str = "Polygon"
    coordinates: list[list[Position]]


class Feature(BaseModel):
    """GeoJSON feature describing one area."""

    type: str = "Feature"
    properties: FeatureProperties
    geometry: PolygonGeometry

    def to_region(self) -> Region:
        """Convert to a Region keeping only the first ring."""
        rings = self.geometry.coordinates
        boundary = (
            tuple(Coordinate(lng=p[0], lat=p[1]) for p in rings[0]) if rings else ()
        )
        return Region(
            name=self.properties.name,
            id=self.properties.id,
            boundary=boundary,
        )


class FeatureCollection(BaseModel):
    """Top-level GeoJSON document.

    Features are kept raw so each one can be validated on its own and a single
    bad feature does not reject the whole collection.
    """

    type: str = "FeatureCollection"
    features: list[Any]
