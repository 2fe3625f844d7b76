"""
Standardized response bodies for the submission relay.
Every body carries a `success` flag; failures carry a single `error` message.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel
from fastapi import status
from fastapi.responses import JSONResponse, Response

SUBMISSION_SUCCESS_MESSAGE = "Form submitted successfully"
GENERIC_ERROR_MESSAGE = "Internal server error"


class SubmissionSuccessResponse(BaseModel):
    """Body returned when AirTable accepted the record."""
    success: bool = True
    recordId: Optional[str] = None
    message: str = SUBMISSION_SUCCESS_MESSAGE


class ErrorResponse(BaseModel):
    """Body returned for every failure."""
    success: bool = False
    error: str


def success_body(record_id: Optional[str]) -> Dict[str, Any]:
    # recordId is omitted, not null, when AirTable returns no id
    return SubmissionSuccessResponse(recordId=record_id).model_dump(exclude_none=True)


def error_body(message: Optional[str]) -> Dict[str, Any]:
    return ErrorResponse(error=message or GENERIC_ERROR_MESSAGE).model_dump()


def create_error_response(
    message: Optional[str],
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    headers: Optional[Dict[str, str]] = None
) -> JSONResponse:
    """Create an error response."""
    return JSONResponse(content=error_body(message), status_code=status_code, headers=headers)


def create_empty_response(headers: Optional[Dict[str, str]] = None) -> Response:
    """Create the empty 200 used to answer CORS preflight."""
    return Response(status_code=status.HTTP_200_OK, headers=headers)


# Common response templates
COMMON_RESPONSES = {
    "method_not_allowed": {
        405: {
            "description": "Method not allowed",
            "content": {
                "application/json": {
                    "example": {"success": False, "error": "Method not allowed"}
                }
            }
        }
    },
    "rate_limit": {
        429: {
            "description": "Rate limit exceeded",
            "content": {
                "application/json": {
                    "example": {"success": False, "error": "Rate limit exceeded: 60 per 1 minute"}
                }
            }
        }
    },
    "server_error": {
        500: {
            "description": "Submission failed",
            "content": {
                "application/json": {
                    "example": {"success": False, "error": "Invalid field"}
                }
            }
        }
    }
}
