"""Tests for the modification-time cached boundary store."""

import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from unittest.mock import patch

from prometheus_client import REGISTRY

from area_geocoder.core.config import Settings
from area_geocoder.core.geocoding.boundaries import (
    BoundaryStore,
    CachedBoundaryStore,
    create_boundary_store,
)
from tests.fixtures.boundaries import (
    KEBELE_RING,
    SABIAN_RING,
    make_feature,
    write_collection,
)


def touch_later(path: Path, seconds: int = 5) -> None:
    """Move the modification time forward so the change is always visible."""
    mtime_ns = path.stat().st_mtime_ns + seconds * 1_000_000_000
    os.utime(path, ns=(mtime_ns, mtime_ns))


class TestCachedBoundaryStore:
    """Tests for CachedBoundaryStore."""

    def test_unchanged_file_is_parsed_once(self, boundary_file: Path):
        """Repeated loads of an unchanged file share one dataset."""
        store = CachedBoundaryStore(boundary_file)
        with patch.object(store, "read_dataset", wraps=store.read_dataset) as reader:
            first = store.load()
            second = store.load()

        assert first is second
        assert len(first) == 4
        assert reader.call_count == 1

    def test_modified_file_is_reloaded(self, sabian_file: Path):
        """A new modification time triggers a reparse."""
        store = CachedBoundaryStore(sabian_file)
        assert [r.name for r in store.load()] == ["Sabian"]

        write_collection(sabian_file, make_feature("Kebele 05", KEBELE_RING, "area-2"))
        touch_later(sabian_file)

        with patch("area_geocoder.core.geocoding.boundaries.logger") as mock_logger:
            regions = store.load()

        assert [r.name for r in regions] == ["Kebele 05"]
        mock_logger.info.assert_called_once()
        assert mock_logger.info.call_args.args[0] == "boundary_dataset_refreshed"

    def test_missing_file_gives_empty_dataset(self, missing_file: Path):
        """A file that cannot be stat'ed degrades to an empty dataset."""
        with patch("area_geocoder.core.geocoding.boundaries.logger") as mock_logger:
            assert CachedBoundaryStore(missing_file).load() == ()
        assert mock_logger.error.call_args.args[0] == "boundary_resource_unavailable"

    def test_deleted_file_drops_cached_dataset(self, sabian_file: Path):
        """Removing the file empties the dataset instead of serving stale data."""
        store = CachedBoundaryStore(sabian_file)
        assert len(store.load()) == 1

        sabian_file.unlink()
        with patch("area_geocoder.core.geocoding.boundaries.logger"):
            assert store.load() == ()

        write_collection(sabian_file, make_feature("Sabian", SABIAN_RING, "area-1"))
        assert [r.name for r in store.load()] == ["Sabian"]

    def test_malformed_file_is_not_reparsed_until_changed(self, malformed_file: Path):
        """A broken file is parsed and reported as an error once per modification."""
        store = CachedBoundaryStore(malformed_file)
        with patch("area_geocoder.core.geocoding.boundaries.logger") as mock_logger:
            with patch.object(
                store, "read_dataset", wraps=store.read_dataset
            ) as reader:
                assert store.load() == ()
                assert store.load() == ()

        assert reader.call_count == 1
        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args.args[0] == "boundary_resource_malformed"

        write_collection(malformed_file, make_feature("Sabian", SABIAN_RING, "area-1"))
        touch_later(malformed_file)
        assert [r.name for r in store.load()] == ["Sabian"]

    def test_cached_failure_is_reported_on_every_load(self, malformed_file: Path):
        """Serving a cached broken dataset still logs and counts the failure."""
        store = CachedBoundaryStore(malformed_file)
        with patch("area_geocoder.core.geocoding.boundaries.logger"):
            store.load()

        before = (
            REGISTRY.get_sample_value(
                "app_boundary_load_failures_total", {"reason": "malformed"}
            )
            or 0.0
        )
        with patch("area_geocoder.core.geocoding.boundaries.logger") as mock_logger:
            assert store.load() == ()
            assert store.load() == ()
        after = REGISTRY.get_sample_value(
            "app_boundary_load_failures_total", {"reason": "malformed"}
        )

        assert after == before + 2
        assert mock_logger.warning.call_count == 2
        assert mock_logger.warning.call_args.args[0] == (
            "boundary_resource_failure_cached"
        )
        assert mock_logger.warning.call_args.kwargs["reason"] == "malformed"
        mock_logger.error.assert_not_called()

    def test_healthy_cached_dataset_logs_nothing(self, sabian_file: Path):
        """Cache hits on a good dataset are silent."""
        store = CachedBoundaryStore(sabian_file)
        store.load()
        with patch("area_geocoder.core.geocoding.boundaries.logger") as mock_logger:
            store.load()
        assert mock_logger.method_calls == []

    def test_invalidate_forces_reread(self, boundary_file: Path):
        """Invalidation rereads even when the file is unchanged."""
        store = CachedBoundaryStore(boundary_file)
        first = store.load()
        store.invalidate()
        second = store.load()

        assert first == second
        assert first is not second

    def test_concurrent_loads_share_one_refresh(self, boundary_file: Path):
        """Concurrent readers see a complete dataset and only one parse runs."""
        store = CachedBoundaryStore(boundary_file)
        with patch.object(store, "read_dataset", wraps=store.read_dataset) as reader:
            with ThreadPoolExecutor(max_workers=8) as executor:
                results = list(executor.map(lambda _: store.load(), range(64)))

        assert reader.call_count == 1
        assert all(result is results[0] for result in results)
        assert len(results[0]) == 4


class TestCreateBoundaryStore:
    """Tests for create_boundary_store."""

    def test_plain_store_by_default(self, boundary_file: Path):
        """Without caching every lookup rereads the file."""
        store = create_boundary_store(Settings(BOUNDARY_FILE=str(boundary_file)))
        assert type(store) is BoundaryStore
        assert store.path == boundary_file

    def test_cached_store_when_enabled(self, boundary_file: Path):
        """The cache is selected by configuration."""
        store = create_boundary_store(
            Settings(BOUNDARY_FILE=str(boundary_file), BOUNDARY_CACHE_ENABLED=True)
        )
        assert isinstance(store, CachedBoundaryStore)
        assert len(store.load()) == 4
