"""Error handling middleware."""

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR
from starlette.types import ASGIApp

from area_geocoder.core.logging import get_logger

logger = get_logger()

# Unprocessable Content
VALIDATION_ERROR_STATUS = 422


def _get_error_detail(exc: Exception) -> tuple[str, int]:
    """Get error detail and status code from exception."""
    if isinstance(exc, StarletteHTTPException):
        return str(exc.detail), exc.status_code
    if isinstance(exc, RequestValidationError):
        locations = ", ".join(
            ".".join(str(part) for part in err.get("loc", ())) for err in exc.errors()
        )
        return f"Invalid request: {locations}", VALIDATION_ERROR_STATUS

    status_code = getattr(exc, "status_code", HTTP_500_INTERNAL_SERVER_ERROR)
    # Unexpected failures do not leak their details
    if status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        return "Internal Server Error", status_code
    return str(exc.args[0] if exc.args else exc), status_code


def _create_error_response(
    error_type: str,
    detail: str,
    status_code: int,
    correlation_id: str | None,
) -> JSONResponse:
    """Create JSON error response with optional correlation ID."""
    response = JSONResponse(
        status_code=status_code,
        content={
            "error": error_type,
            "message": detail,
            "status_code": status_code,
            "correlation_id": correlation_id if correlation_id else "unknown",
        },
        media_type="application/json",
    )
    if correlation_id:
        response.headers["X-Request-ID"] = correlation_id
    return response


def _log_error(
    request: Request,
    error_type: str,
    detail: str,
    status_code: int,
    correlation_id: str | None,
) -> None:
    """Log error details."""
    log = logger.error if status_code >= HTTP_500_INTERNAL_SERVER_ERROR else logger.info
    log(
        "request_error",
        error_type=error_type,
        error_message=detail,
        status_code=status_code,
        path=request.url.path,
        method=request.method,
        correlation_id=correlation_id,
    )


async def handle_exception(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle an exception and return a JSON response.

    Args:
    ----
        request: The request that caused the exception
        exc: The exception to handle

    Returns:
    -------
        A JSON response with error details
    """
    error_type = (
        "HTTPException"
        if isinstance(exc, StarletteHTTPException)
        else exc.__class__.__name__
    )
    detail, status_code = _get_error_detail(exc)
    correlation_id = getattr(request.state, "correlation_id", None)

    _log_error(request, error_type, detail, status_code, correlation_id)
    return _create_error_response(error_type, detail, status_code, correlation_id)


def register_exception_handlers(app: FastAPI) -> None:
    """Route HTTP and validation errors through the JSON error envelope."""
    app.add_exception_handler(StarletteHTTPException, handle_exception)
    app.add_exception_handler(HTTPException, handle_exception)
    app.add_exception_handler(RequestValidationError, handle_exception)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Middleware turning unhandled exceptions into JSON error responses."""

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
        Process the request/response cycle and handle errors.

        Args:
        ----
            request: The incoming request
            call_next: The next handler in the middleware chain

        Returns:
        -------
            The response from downstream handlers or error response
        """
        try:
            return await call_next(request)
        except Exception as exc:
            if not isinstance(exc, StarletteHTTPException | RequestValidationError):
                logger.exception(
                    "unhandled_exception",
                    path=request.url.path,
                    method=request.method,
                )
            return await handle_exception(request, exc)
