"""Boundary dataset loading.

The dataset is a GeoJSON FeatureCollection read from a fixed path. Loading
degrades instead of failing: an unreadable or malformed document becomes an
empty dataset and a feature that does not validate is skipped, so a lookup
can only ever end in "no match", never in an error.
"""

import json
import os
import threading
from pathlib import Path
from typing import NamedTuple

from pydantic import ValidationError

from area_geocoder.core.config import Settings
from area_geocoder.core.events import BOUNDARY_LOAD_FAILURES, BOUNDARY_REGIONS
from area_geocoder.core.logging import get_logger
from area_geocoder.models.geographic import Feature, FeatureCollection, Region

logger = get_logger()

Dataset = tuple[Region, ...]


class BoundaryLoadError(Exception):
    """Raised when the boundary dataset cannot be produced."""

    reason = "error"


class ResourceUnavailableError(BoundaryLoadError):
    """The boundary resource could not be read."""

    reason = "unavailable"


class MalformedResourceError(BoundaryLoadError):
    """The boundary resource is not a FeatureCollection document."""

    reason = "malformed"


def parse_dataset(data: str | bytes, source: str = "<memory>") -> Dataset:
    """Parse a FeatureCollection document into regions.

    Args:
        data: Raw document content
        source: Label used in log entries

    Returns:
        Regions in document order

    Raises:
        MalformedResourceError: If the document is not JSON or not a collection
    """
    try:
        raw = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedResourceError(f"{source} is not valid JSON: {e}") from e

    try:
        collection = FeatureCollection.model_validate(raw)
    except ValidationError as e:
        raise MalformedResourceError(
            f"{source} is not a FeatureCollection: {e.error_count()} error(s)"
        ) from e

    regions: list[Region] = []
    for index, raw_feature in enumerate(collection.features):
        try:
            feature = Feature.model_validate(raw_feature)
        except ValidationError as e:
            BOUNDARY_LOAD_FAILURES.labels(reason="invalid_feature").inc()
            logger.warning(
                "boundary_feature_skipped",
                source=source,
                index=index,
                errors=[
                    ".".join(str(part) for part in err["loc"]) for err in e.errors()
                ],
            )
            continue
        region = feature.to_region()
        if region.is_degenerate:
            logger.warning(
                "boundary_region_degenerate",
                source=source,
                index=index,
                name=region.name,
                vertices=len(region.boundary),
            )
        regions.append(region)

    return tuple(regions)


class BoundaryStore:
    """Reads the boundary dataset fresh from disk on every load."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def read_dataset(self) -> Dataset:
        """Read and parse the dataset, raising on failure.

        Raises:
            ResourceUnavailableError: If the file cannot be read
            MalformedResourceError: If the content cannot be parsed
        """
        try:
            data = self.path.read_bytes()
        except OSError as e:
            raise ResourceUnavailableError(
                f"Cannot read boundary file {self.path}: {e}"
            ) from e
        regions = parse_dataset(data, source=str(self.path))
        BOUNDARY_REGIONS.set(len(regions))
        return regions

    def load(self) -> Dataset:
        """Load the dataset, returning an empty one on any failure."""
        try:
            regions = self.read_dataset()
        except BoundaryLoadError as e:
            _record_failure(e, self.path)
            return ()
        logger.debug(
            "boundary_dataset_loaded", path=str(self.path), regions=len(regions)
        )
        return regions


class _Snapshot(NamedTuple):
    mtime_ns: int
    regions: Dataset
    error: BoundaryLoadError | None = None


class CachedBoundaryStore(BoundaryStore):
    """Boundary store that reparses only when the file changes.

    Every load stats the file. A changed modification time triggers a reload
    by a single writer; the new snapshot replaces the old one in one
    assignment so concurrent readers see either the old or the new dataset.
    """

    def __init__(self, path: str | Path) -> None:
        super().__init__(path)
        self._snapshot: _Snapshot | None = None
        self._refresh_lock = threading.Lock()

    def load(self) -> Dataset:
        try:
            mtime_ns = os.stat(self.path).st_mtime_ns
        except OSError as e:
            self._snapshot = None
            error = ResourceUnavailableError(
                f"Cannot stat boundary file {self.path}: {e}"
            )
            _record_failure(error, self.path)
            return ()

        snapshot = self._snapshot
        if snapshot is not None and snapshot.mtime_ns == mtime_ns:
            return self._serve(snapshot)

        with self._refresh_lock:
            snapshot = self._snapshot
            if snapshot is not None and snapshot.mtime_ns == mtime_ns:
                return self._serve(snapshot)
            try:
                regions = self.read_dataset()
            except BoundaryLoadError as e:
                # Stays empty until the file changes again
                self._snapshot = _Snapshot(mtime_ns, (), e)
                _record_failure(e, self.path)
                return ()
            self._snapshot = _Snapshot(mtime_ns, regions)
            logger.info(
                "boundary_dataset_refreshed",
                path=str(self.path),
                regions=len(regions),
            )
            return regions

    def _serve(self, snapshot: _Snapshot) -> Dataset:
        if snapshot.error is not None:
            BOUNDARY_LOAD_FAILURES.labels(reason=snapshot.error.reason).inc()
            logger.warning(
                "boundary_resource_failure_cached",
                path=str(self.path),
                reason=snapshot.error.reason,
                error=str(snapshot.error),
            )
        return snapshot.regions

    def invalidate(self) -> None:
        """Drop the cached snapshot so the next load rereads the file."""
        self._snapshot = None


def _record_failure(error: BoundaryLoadError, path: Path) -> None:
    BOUNDARY_LOAD_FAILURES.labels(reason=error.reason).inc()
    logger.error(
        f"boundary_resource_{error.reason}",
        path=str(path),
        error=str(error),
    )


def create_boundary_store(settings: Settings) -> BoundaryStore:
    """Build the store selected by configuration."""
    if settings.BOUNDARY_CACHE_ENABLED:
        return CachedBoundaryStore(settings.BOUNDARY_FILE)
    return BoundaryStore(settings.BOUNDARY_FILE)
