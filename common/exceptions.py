"""
Centralized exception classes for the form submission relay.
Provides a hierarchy of custom exceptions with proper error codes and messages.
"""

from typing import Optional, Dict, Any
from fastapi import HTTPException, status


class BaseRelayException(HTTPException):
    """Base exception class for all relay errors."""

    def __init__(
        self,
        detail: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        headers: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def __str__(self) -> str:
        return str(self.detail)


class MethodNotAllowedException(BaseRelayException):
    """Inbound HTTP method is not one the relay accepts."""

    def __init__(
        self,
        method: Optional[str] = None,
        detail: str = "Method not allowed",
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            detail=detail,
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            error_code="METHOD_NOT_ALLOWED",
            context=context or {"method": method}
        )


class ConfigurationException(BaseRelayException):
    """Required server-side configuration is missing."""

    def __init__(
        self,
        detail: str,
        setting: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            detail=detail,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="CONFIGURATION_ERROR",
            context=context or {"setting": setting}
        )


# Validation Exceptions
class ValidationException(BaseRelayException):
    """Data validation errors."""

    def __init__(
        self,
        detail: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            detail=detail,
            status_code=422,
            error_code="VALIDATION_ERROR",
            context=context or {"field": field, "value": value}
        )


# External Service Exceptions
class ExternalServiceException(BaseRelayException):
    """External service errors."""

    def __init__(
        self,
        detail: str,
        service_name: str,
        error_code: str = "EXTERNAL_SERVICE_ERROR",
        status_code: int = status.HTTP_503_SERVICE_UNAVAILABLE,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            detail=detail,
            status_code=status_code,
            error_code=error_code,
            context=context or {"service_name": service_name}
        )


class UpstreamServiceException(ExternalServiceException):
    """The AirTable API rejected the call or could not be reached."""

    def __init__(
        self,
        detail: str,
        upstream_status: Optional[int] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            detail=detail,
            service_name="airtable",
            error_code="UPSTREAM_ERROR",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            context=context or {
                "service_name": "airtable",
                "upstream_status": upstream_status,
                "operation": operation,
            }
        )
        self.upstream_status = upstream_status
