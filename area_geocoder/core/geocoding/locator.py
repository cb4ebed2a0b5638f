"""Point-in-area lookup by ray casting."""

from collections.abc import Iterable, Sequence

from area_geocoder.models.geographic import NO_MATCH, AreaMatch, Coordinate, Region


def point_in_ring(lng: float, lat: float, ring: Sequence[Coordinate]) -> bool:
    """Test whether a point lies inside a ring using the even-odd rule.

    A horizontal ray is cast from the point towards increasing longitude and
    every edge it crosses toggles the result. The ring is closed implicitly by
    wrapping back to the first vertex. The latitude test is half-open so a
    vertex shared by two edges is counted once. Points exactly on an edge may
    fall either way.

    Args:
        lng: Longitude of the point
        lat: Latitude of the point
        ring: Vertices as (lng, lat) pairs

    Returns:
        True if the point is inside. Rings with fewer than 3 vertices never
        contain anything.
    """
    n = len(ring)
    if n < 3:
        return False

    inside = False
    p1x, p1y = ring[0]
    for i in range(n + 1):
        p2x, p2y = ring[i % n]
        if (
            min(p1y, p2y) < lat <= max(p1y, p2y)
            and lng <= max(p1x, p2x)
            and p1y != p2y
        ):
            x_intersect = (lat - p1y) * (p2x - p1x) / (p2y - p1y) + p1x
            if p1x == p2x or lng <= x_intersect:
                inside = not inside
        p1x, p1y = p2x, p2y

    return inside


def region_contains(region: Region, lng: float, lat: float) -> bool:
    """Whether the region's outer ring contains the point."""
    return point_in_ring(lng, lat, region.boundary)


def find_area(lng: float, lat: float, regions: Iterable[Region]) -> AreaMatch:
    """Return the first region in dataset order that contains the point.

    Overlaps are resolved by order alone. Returns ``NO_MATCH`` when nothing
    contains the point, including for an empty dataset.
    """
    for region in regions:
        if region_contains(region, lng, lat):
            return AreaMatch(name=region.name, id=region.id)
    return NO_MATCH
