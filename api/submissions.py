import json
from typing import Any, Optional

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from common.logging import get_logger
from common.responses import COMMON_RESPONSES, create_empty_response
from config.config import Settings
from config.cors import cors_headers
from dependencies import SettingsDep, SubmissionRelayDep
from entities.submission import RelayResponse

logger = get_logger("api.submissions")

# every method reaches the relay so that unsupported ones get the uniform 405 body
RELAY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
BODY_METHODS = {"POST", "PUT", "PATCH"}

router = APIRouter(tags=["Submissions"])


async def read_json_body(request: Request) -> Optional[Any]:
    """Parsed JSON body, or None when the body is missing or not valid JSON."""
    if request.method not in BODY_METHODS:
        return None
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        logger.warning("Request body is not valid JSON", extra={"content_length": len(raw)})
        return None


def to_http_response(result: RelayResponse, settings: Settings) -> Response:
    headers = cors_headers(settings)
    if result.is_empty:
        return create_empty_response(headers=headers)
    return JSONResponse(content=result.body, status_code=result.status_code, headers=headers)


@router.api_route("/submit-form",
    methods=RELAY_METHODS,
    summary="Submit form to AirTable",
    description="Creates an AirTable record, or updates it when `airtable_record_id` is supplied.",
    responses={
        **COMMON_RESPONSES["method_not_allowed"],
        **COMMON_RESPONSES["rate_limit"],
        **COMMON_RESPONSES["server_error"],
    }
)
async def submit_form(
    request: Request,
    relay: SubmissionRelayDep,
    settings: SettingsDep
) -> Response:
    body = await read_json_body(request)
    result = await relay.handle(request.method, body)
    return to_http_response(result, settings)
