from typing import Dict

from config.config import Settings

ALLOWED_METHODS = "POST, PATCH, OPTIONS"
ALLOWED_HEADERS = "Content-Type"


def cors_headers(settings: Settings) -> Dict[str, str]:
    """Headers attached to every relay response, including errors."""
    return {
        "Access-Control-Allow-Origin": settings.cors_allow_origin,
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
    }
