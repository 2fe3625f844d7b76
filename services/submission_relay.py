"""
Form submission relay.

Validates the inbound method, reshapes the submission into AirTable record
fields, creates or updates the record and maps the outcome to a uniform
`{success, ...}` body.
"""

import logging
from typing import Any, Optional, Mapping

import httpx
from fastapi import status

from adapters.airtable_adapter import BaseRecordAdapter, create_airtable_adapter
from common.exceptions import (
    BaseRelayException,
    ConfigurationException,
    MethodNotAllowedException,
    ValidationException,
)
from common.logging import (
    RequestContextLogger,
    get_logger,
    log_business_event,
    log_error,
    request_id_var,
)
from common.responses import GENERIC_ERROR_MESSAGE, error_body, success_body
from config.config import Settings
from entities.submission import AirtableRecord, RelayResponse, SubmissionOperation
from services.field_mapping import build_record_payload, get_record_id, resolve_operation

PREFLIGHT_METHOD = "OPTIONS"
ACCEPTED_METHODS = frozenset({"POST", "PATCH"})


class SubmissionRelay:
    """
    Stateless relay between the browser form and AirTable.
    Settings and the record adapter are fixed at construction; every call to
    `handle` works on its own local data.
    """

    def __init__(
        self,
        settings: Settings,
        adapter: Optional[BaseRecordAdapter],
        logger: Optional[logging.Logger] = None
    ):
        self.settings = settings
        self.adapter = adapter
        self.logger = logger or get_logger("submission_relay")

    async def handle(self, method: Optional[str], body: Any) -> RelayResponse:
        """Run one submission through the relay and return the response to send."""
        method = (method or "").upper()

        if method == PREFLIGHT_METHOD:
            return RelayResponse(status_code=status.HTTP_200_OK)

        if method not in ACCEPTED_METHODS:
            error = MethodNotAllowedException(method=method)
            self.logger.warning(
                f"Rejected {method or 'unknown'} request",
                extra={"error_code": error.error_code, "method": method}
            )
            return RelayResponse(status_code=error.status_code, body=error_body(error.detail))

        session_id = body.get("session_id") if isinstance(body, Mapping) else None
        with RequestContextLogger(request_id=request_id_var.get(), session_id=session_id):
            try:
                record = await self._submit(body)
            except Exception as e:
                log_error(e, context={"method": method}, logger=self.logger)
                return RelayResponse(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    body=error_body(self._error_message(e)),
                )

        return RelayResponse(status_code=status.HTTP_200_OK, body=success_body(record.id))

    async def _submit(self, body: Any) -> AirtableRecord:
        if not self.settings.airtable_api_key or self.adapter is None:
            raise ConfigurationException(
                detail="AirTable API key not configured",
                setting="AIRTABLE_API_KEY"
            )

        if not isinstance(body, Mapping):
            raise ValidationException(
                detail="Request body must be a JSON object",
                field="body",
                value=type(body).__name__
            )

        payload = build_record_payload(body)
        operation = resolve_operation(body)

        if operation is SubmissionOperation.UPDATE:
            record = await self.adapter.update_record(get_record_id(body), payload)
        else:
            record = await self.adapter.create_record(payload)

        log_business_event(
            event_type=f"submission_{operation.value}d",
            entity_type="form_submission",
            entity_id=record.id or "",
            action=operation.value,
            details={
                "direction": payload.fields.get("direction"),
                "field_count": len(payload.fields),
            }
        )
        return record

    @staticmethod
    def _error_message(error: Exception) -> str:
        if isinstance(error, BaseRelayException):
            return str(error.detail) or GENERIC_ERROR_MESSAGE
        return str(error) or GENERIC_ERROR_MESSAGE


# Factory function
def create_submission_relay(
    settings: Settings,
    adapter: Optional[BaseRecordAdapter] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    logger: Optional[logging.Logger] = None
) -> SubmissionRelay:
    """Factory function to create SubmissionRelay instance."""
    if adapter is None:
        adapter = create_airtable_adapter(settings, transport=transport)
    return SubmissionRelay(settings, adapter, logger=logger)
