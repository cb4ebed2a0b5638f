"""Application startup and shutdown events."""

from collections.abc import Awaitable, Callable
from typing import Any

from prometheus_client import Counter, Gauge

from area_geocoder.core.config import settings
from area_geocoder.core.logging import configure_logging, get_logger

# Prometheus metrics
REQUESTS_TOTAL = Counter(
    "app_http_requests_total",
    "Total number of HTTP requests",
    labelnames=["method", "path"],
)

RESPONSES_TOTAL = Counter(
    "app_http_responses_total",
    "Total number of HTTP responses",
    labelnames=["status_code"],
)

LOOKUPS_TOTAL = Counter(
    "app_area_lookups_total",
    "Total number of point-in-area lookups",
    labelnames=["outcome"],
)

BOUNDARY_LOAD_FAILURES = Counter(
    "app_boundary_load_failures_total",
    "Boundary dataset reads or features that could not be used",
    labelnames=["reason"],
)

BOUNDARY_REGIONS = Gauge(
    "app_boundary_regions",
    "Number of regions in the most recently loaded boundary dataset",
)

logger = get_logger()


def create_start_app_handler(app: Any) -> Callable[[], Awaitable[None]]:
    """Create startup event handler.

    Args:
        app: FastAPI application instance

    Returns:
        Startup handler function
    """

    async def start_app() -> None:
        from area_geocoder.core.geocoding.boundaries import (
            BoundaryLoadError,
            BoundaryStore,
        )

        configure_logging(level=settings.LOG_LEVEL, json_logs=settings.JSON_LOGS)

        # The dataset is reloaded per lookup; this only reports its state early
        try:
            regions = BoundaryStore(settings.BOUNDARY_FILE).read_dataset()
        except BoundaryLoadError as e:
            logger.warning(
                "boundary_dataset_unusable_at_startup",
                path=settings.BOUNDARY_FILE,
                error=str(e),
            )
        else:
            logger.info(
                "boundary_dataset_found",
                path=settings.BOUNDARY_FILE,
                regions=len(regions),
            )

        logger.info(
            "application_startup_complete",
            app=app.title,
            version=settings.version,
            boundary_cache=settings.BOUNDARY_CACHE_ENABLED,
        )

    return start_app


def create_stop_app_handler(app: Any) -> Callable[[], Awaitable[None]]:
    """Create shutdown event handler.

    Args:
        app: FastAPI application instance

    Returns:
        Shutdown handler function
    """

    async def stop_app() -> None:
        logger.info("application_shutdown_complete", app=app.title)

    return stop_app
