from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from starlette.exceptions import HTTPException as StarletteHTTPException
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from config.config import Settings, settings, tags_metadata
from config.cors import cors_headers
from common.exceptions import MethodNotAllowedException
from common.logging import setup_logging, get_logger
from common.middleware import setup_middleware
from common.responses import create_error_response
from services.submission_relay import SubmissionRelay, create_submission_relay
from api.health import SERVICE_NAME, SERVICE_VERSION, router as health_router
from api.submissions import router as submissions_router

setup_logging(
    level=settings.log_level,
    format_type=settings.log_format
)

logger = get_logger("main")


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    logger.warning(f"Rate limit exceeded: {exc.detail}", extra={
        "path": str(request.url.path),
        "method": request.method,
        "client_ip": request.client.host if request.client else None
    })
    response = create_error_response(
        message=f"Rate limit exceeded: {exc.detail}",
        status_code=429,
        headers=cors_headers(request.app.state.settings)
    )
    return request.app.state.limiter._inject_headers(response, request.state.view_rate_limit)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Methods the route does not list still get the uniform 405 body and CORS headers."""
    if exc.status_code != 405:
        return await http_exception_handler(request, exc)
    error = MethodNotAllowedException(method=request.method)
    logger.warning(f"Rejected {request.method} request", extra={
        "error_code": error.error_code,
        "path": str(request.url.path),
        "method": request.method
    })
    return create_error_response(
        message=error.detail,
        status_code=error.status_code,
        headers={**(exc.headers or {}), **cors_headers(request.app.state.settings)}
    )


def create_app(
    app_settings: Optional[Settings] = None,
    relay: Optional[SubmissionRelay] = None
) -> FastAPI:
    """Build the application; settings are read once here and shared by every request."""
    app_settings = app_settings or settings

    if not app_settings.is_airtable_configured():
        logger.warning("AIRTABLE_API_KEY is not set; submissions will be answered with 500")

    limiter = Limiter(
        key_func=get_remote_address,
        headers_enabled=True,
        default_limits=[app_settings.rate_limit_default],
        storage_uri=app_settings.rate_limit_storage_uri,
        enabled=app_settings.rate_limit_enabled,
    )

    app = FastAPI(
        title="Form Submission Relay",
        version=SERVICE_VERSION,
        description="Relays browser form submissions to AirTable without exposing the API key",
        openapi_tags=tags_metadata,
    )
    app.state.settings = app_settings
    app.state.submission_relay = relay or create_submission_relay(app_settings)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_middleware(SlowAPIMiddleware)

    setup_middleware(app, app_settings)

    @app.get("/",
        summary="Root endpoint",
        description="Simple health check and API info"
    )
    async def root():
        """Root endpoint for basic health check."""
        return {
            "message": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "status": "healthy",
            "docs": "/docs",
        }

    app.include_router(submissions_router, prefix="/api")
    app.include_router(health_router, prefix="/api")
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
