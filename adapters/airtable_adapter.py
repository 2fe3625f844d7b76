"""
AirTable API adapter for external service integration.
This handles all direct communication with the AirTable REST API.
"""

import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from common.exceptions import UpstreamServiceException
from common.logging import get_logger, log_performance
from config.config import Settings
from entities.submission import AirtableRecord, RecordPayload, SubmissionOperation

logger = get_logger("airtable_adapter")

DEFAULT_UPSTREAM_ERROR = "Failed to submit to AirTable"


class BaseRecordAdapter(ABC):
    """Abstract base class for record store adapters."""

    @abstractmethod
    async def create_record(self, payload: RecordPayload) -> AirtableRecord:
        """Create a new record."""
        pass

    @abstractmethod
    async def update_record(self, record_id: str, payload: RecordPayload) -> AirtableRecord:
        """Update an existing record."""
        pass


class AirtableAdapter(BaseRecordAdapter):
    """
    AirTable adapter for creating and updating table records.

    A fresh `httpx.AsyncClient` is opened per call; `transport` lets callers
    swap the network layer (e.g. `httpx.MockTransport`).
    """

    def __init__(
        self,
        api_key: str,
        base_id: str,
        table_name: str,
        api_url: str = "https://api.airtable.com",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = api_key
        self.base_id = base_id
        self.table_name = table_name
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def table_url(self) -> str:
        # same escaping as encodeURIComponent
        table = quote(self.table_name, safe="-_.!~*'()")
        return f"{self.api_url}/v0/{self.base_id}/{table}"

    def record_url(self, record_id: str) -> str:
        return f"{self.table_url}/{quote(record_id, safe='')}"

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def create_record(self, payload: RecordPayload) -> AirtableRecord:
        """Create a record with a POST to the table collection."""
        return await self._send(SubmissionOperation.CREATE, self.table_url, payload)

    async def update_record(self, record_id: str, payload: RecordPayload) -> AirtableRecord:
        """Update a record with a PATCH to the record resource."""
        return await self._send(SubmissionOperation.UPDATE, self.record_url(record_id), payload)

    async def _send(
        self,
        operation: SubmissionOperation,
        url: str,
        payload: RecordPayload
    ) -> AirtableRecord:
        start_time = time.time()
        method = operation.http_method

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(
                    method,
                    url,
                    headers=self._headers(),
                    json=payload.model_dump(),
                )
        except httpx.TimeoutException as e:
            logger.error(f"AirTable {method} timed out after {self.timeout}s")
            raise UpstreamServiceException(
                detail="AirTable request timed out",
                operation=operation.value,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"AirTable {method} failed: {e}")
            raise UpstreamServiceException(
                detail=f"Failed to reach AirTable: {e}",
                operation=operation.value,
            ) from e

        duration_ms = (time.time() - start_time) * 1000

        if not response.is_success:
            error_data = self._read_error_body(response)
            logger.error(
                "AirTable API error",
                extra={
                    "upstream_status": response.status_code,
                    "error_data": error_data,
                    "operation": operation.value,
                }
            )
            log_performance(
                operation=f"airtable_{operation.value}",
                duration_ms=duration_ms,
                success=False,
                upstream_status=response.status_code,
            )
            raise UpstreamServiceException(
                detail=self._extract_error_message(error_data),
                upstream_status=response.status_code,
                operation=operation.value,
            )

        log_performance(
            operation=f"airtable_{operation.value}",
            duration_ms=duration_ms,
            success=True,
            upstream_status=response.status_code,
        )

        try:
            data = response.json()
        except ValueError:
            logger.warning("AirTable returned a non-JSON success body")
            data = {}
        return AirtableRecord.from_dict(data)

    @staticmethod
    def _read_error_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return {"raw": response.text[:300]}

    @staticmethod
    def _extract_error_message(error_data: Any) -> str:
        """Pull `error.message` (or a bare `error` string) out of an AirTable error body."""
        if not isinstance(error_data, dict):
            return DEFAULT_UPSTREAM_ERROR
        error = error_data.get("error")
        if isinstance(error, dict):
            message = error.get("message")
            if message:
                return str(message)
        elif isinstance(error, str) and error:
            return error
        return DEFAULT_UPSTREAM_ERROR


def create_airtable_adapter(
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> Optional[AirtableAdapter]:
    """Factory function; returns None when no API key is configured."""
    if not settings.airtable_api_key:
        return None
    return AirtableAdapter(
        api_key=settings.airtable_api_key,
        base_id=settings.airtable_base_id,
        table_name=settings.airtable_table_name,
        api_url=settings.airtable_api_url,
        timeout=settings.airtable_timeout_seconds,
        transport=transport,
    )
