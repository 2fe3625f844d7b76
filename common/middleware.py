"""
Middleware for error handling, logging, and request tracking.
"""
import time
import uuid

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from common.logging import get_logger, log_api_request, request_id_var
from common.responses import create_error_response
from config.config import Settings
from config.cors import cors_headers

REQUEST_ID_HEADER = "X-Request-ID"


class RequestTrackingMiddleware(BaseHTTPMiddleware):
    """Middleware for tracking requests with correlation IDs and logging."""

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.logger = get_logger("middleware")

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Bind a request id for the duration of the request and log the outcome."""
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        token = request_id_var.set(request_id)
        start_time = time.time()
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            log_api_request(
                method=request.method,
                path=str(request.url.path),
                status_code=response.status_code,
                duration_ms=(time.time() - start_time) * 1000,
                ip_address=request.client.host if request.client else None,
                user_agent=request.headers.get("user-agent"),
            )
            return response
        finally:
            request_id_var.reset(token)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Last-resort handler: anything escaping a route becomes the uniform 500 body."""

    def __init__(self, app: ASGIApp, settings: Settings):
        super().__init__(app)
        self.settings = settings
        self.logger = get_logger("error_handler")

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return self._handle_unexpected_error(e, request)

    def _handle_unexpected_error(self, error: Exception, request: Request) -> JSONResponse:
        self.logger.error(
            f"Unexpected error: {type(error).__name__}",
            extra={
                "error_type": type(error).__name__,
                "error_message": str(error),
                "path": str(request.url.path),
                "method": request.method
            },
            exc_info=True
        )

        # Don't expose internal error details
        return create_error_response(
            message=None,
            status_code=500,
            headers=cors_headers(self.settings),
        )


def setup_middleware(app, settings: Settings) -> None:
    """Setup all middleware for the application."""
    # Add middleware in reverse order (last added is executed first)
    app.add_middleware(ErrorHandlingMiddleware, settings=settings)
    app.add_middleware(RequestTrackingMiddleware)
