"""Serverless entry point (AWS Lambda proxy / Netlify Functions).

Runs the same relay as the HTTP route and returns the
`{statusCode, headers, body}` mapping those platforms expect.
"""

import asyncio
import base64
import json
from typing import Any, Callable, Dict, Mapping, Optional

from common.logging import RequestContextLogger, get_logger, setup_logging
from config.config import Settings, settings
from config.cors import cors_headers
from entities.submission import RelayResponse
from services.submission_relay import SubmissionRelay, create_submission_relay

logger = get_logger("serverless")

_default_handler: Optional[Callable[[Mapping[str, Any], Any], Dict[str, Any]]] = None


def event_method(event: Mapping[str, Any]) -> Optional[str]:
    # REST (v1) events carry httpMethod, HTTP API (v2) events nest it
    method = event.get("httpMethod")
    if method:
        return method
    request_context = event.get("requestContext") or {}
    return (request_context.get("http") or {}).get("method")


def parse_event_body(event: Mapping[str, Any]) -> Optional[Any]:
    body = event.get("body")
    if body is None or body == "":
        return None
    if isinstance(body, (dict, list)):
        return body
    try:
        if event.get("isBase64Encoded"):
            body = base64.b64decode(body).decode("utf-8")
        return json.loads(body)
    except ValueError:
        logger.warning("Event body is not valid JSON")
        return None


def to_lambda_response(result: RelayResponse, app_settings: Settings) -> Dict[str, Any]:
    headers = cors_headers(app_settings)
    if result.is_empty:
        return {"statusCode": result.status_code, "headers": headers, "body": ""}
    headers["Content-Type"] = "application/json"
    return {
        "statusCode": result.status_code,
        "headers": headers,
        "body": json.dumps(result.body),
    }


def build_handler(
    relay: SubmissionRelay,
    app_settings: Settings
) -> Callable[[Mapping[str, Any], Any], Dict[str, Any]]:
    """Bind a relay into a `handler(event, context)` function."""

    def handler(event: Mapping[str, Any], context: Any = None) -> Dict[str, Any]:
        request_id = getattr(context, "aws_request_id", None)
        with RequestContextLogger(request_id=request_id):
            result = asyncio.run(relay.handle(event_method(event), parse_event_body(event)))
        return to_lambda_response(result, app_settings)

    return handler


def handler(event: Mapping[str, Any], context: Any = None) -> Dict[str, Any]:
    """Platform entry point; the relay is built on the first (cold start) call."""
    global _default_handler
    if _default_handler is None:
        setup_logging(level=settings.log_level, format_type=settings.log_format)
        _default_handler = build_handler(create_submission_relay(settings), settings)
    return _default_handler(event, context)
