"""Main FastAPI application module."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from area_geocoder.api.v1.geocode import router as geocode_router
from area_geocoder.api.v1.router import router as v1_router
from area_geocoder.core.config import settings
from area_geocoder.core.events import create_start_app_handler, create_stop_app_handler
from area_geocoder.middleware.correlation import CorrelationMiddleware
from area_geocoder.middleware.errors import (
    ErrorHandlingMiddleware,
    register_exception_handlers,
)
from area_geocoder.middleware.metrics import MetricsMiddleware
from area_geocoder.middleware.security import SecurityHeadersMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan events."""
    await create_start_app_handler(app)()
    yield
    await create_stop_app_handler(app)()


app = FastAPI(
    title=settings.app_name,
    description="Point-in-area reverse geocoding with Google Geocoding API responses",
    version=settings.version,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    default_response_class=JSONResponse,
    lifespan=lifespan,
)

# Middleware added last wraps outermost. Resulting order (outside -> in):
# 1. CORS
# 2. Security headers
# 3. Correlation (adds request ID)
# 4. Metrics (tracks all requests)
# 5. Error handling (handles anything raised below it)
app.add_middleware(ErrorHandlingMiddleware)
app.add_middleware(MetricsMiddleware)
app.add_middleware(CorrelationMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
    max_age=600,
)
register_exception_handlers(app)


@app.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Expose Prometheus metrics."""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


app.include_router(v1_router, prefix=settings.api_prefix)
app.include_router(geocode_router)
