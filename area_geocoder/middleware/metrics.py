"""Request metrics middleware for Prometheus monitoring."""

import time

from fastapi import Request, Response
from prometheus_client import Histogram
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.routing import Route
from starlette.types import ASGIApp

from area_geocoder.core.events import REQUESTS_TOTAL, RESPONSES_TOTAL
from area_geocoder.core.logging import get_logger

logger = get_logger()

REQUEST_DURATION = Histogram(
    "app_http_request_duration_seconds",
    "HTTP request duration in seconds",
    labelnames=["method", "path"],
)

UNMATCHED_PATH = "<unmatched>"


def route_path(request: Request) -> str:
    """Return the route template for a request.

    Raw paths are not used as labels; unmatched requests share one label so
    scanners cannot inflate the metric cardinality.
    """
    route = request.scope.get("route")
    if isinstance(route, Route):
        return route.path
    return UNMATCHED_PATH


class MetricsMiddleware(BaseHTTPMiddleware):
    """
    Middleware to collect request/response metrics.

    Records:
    - Total requests by method and route
    - Total responses by status code
    - Request duration histogram
    """

    def __init__(self, app: ASGIApp) -> None:
        """
        Initialize middleware.

        Args:
        ----
            app: The ASGI application
        """
        super().__init__(app)

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """
        Process the request/response cycle and record metrics.

        Args:
        ----
            request: The incoming request
            call_next: The next handler in the middleware chain

        Returns:
        -------
            The response from downstream handlers
        """
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
            )
            raise
        duration = time.perf_counter() - start_time

        # Route is resolved by the router during call_next
        path = route_path(request)
        REQUESTS_TOTAL.labels(method=request.method, path=path).inc()
        REQUEST_DURATION.labels(method=request.method, path=path).observe(duration)
        RESPONSES_TOTAL.labels(status_code=str(response.status_code)).inc()

        logger.info(
            "request_processed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration=duration,
        )
        return response
