from fastapi import APIRouter

from dependencies import SettingsDep

SERVICE_NAME = "Form Submission Relay"
SERVICE_VERSION = "1.0.0"

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("/status",
    summary="Application health status",
    description="Basic health check endpoint"
)
def health_status(settings: SettingsDep):
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "airtable_configured": settings.is_airtable_configured(),
    }
