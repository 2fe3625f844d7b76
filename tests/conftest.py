"""
Shared fixtures for the submission relay tests.

AirTable is simulated with `httpx.MockTransport`; every request the relay
sends is recorded on the `FakeAirtable` instance.
"""

import json
from typing import Any, Dict, List, Optional

import httpx
import pytest

from config.config import Settings
from services.submission_relay import create_submission_relay

TEST_API_KEY = "key_test_123"
TEST_BASE_ID = "appTEST0001"


class FakeAirtable:
    """Records outbound requests and answers with a canned response."""

    def __init__(self, status_code: int = 200, json_body: Optional[Any] = None, text: Optional[str] = None):
        self.status_code = status_code
        self.json_body = {"id": "rec123"} if json_body is None and text is None else json_body
        self.text = text
        self.requests: List[httpx.Request] = []

    def respond_with(self, status_code: int, json_body: Optional[Any] = None, text: Optional[str] = None) -> None:
        self.status_code = status_code
        self.json_body = json_body
        self.text = text

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_fields(self) -> Dict[str, Any]:
        return json.loads(self.last_request.content)["fields"]


def make_settings(**overrides) -> Settings:
    values = {
        "airtable_api_key": TEST_API_KEY,
        "airtable_base_id": TEST_BASE_ID,
        "airtable_table_name": "Form Submissions",
        "airtable_api_url": "https://api.airtable.com",
        "rate_limit_enabled": False,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def fake_airtable() -> FakeAirtable:
    return FakeAirtable()


@pytest.fixture
def relay(settings, fake_airtable):
    return create_submission_relay(settings, transport=fake_airtable.transport)


@pytest.fixture
def import_submission() -> Dict[str, Any]:
    return {
        "first_name": "Ana",
        "last_name": "Lopez",
        "email": "ana@example.com",
        "phone": "",
        "company_name": "Lopez Trading",
        "customer_type": "business",
        "consent_checkbox": True,
        "direction": "import",
        "goods_location": "China",
        "arrival_method": "sea",
        "arrival_timeline": "1-2 weeks",
        "customs_code_status": "have_code",
        "customs_code_number": "CC-4411",
        "export_service_needed": "full",
        "destination_country": "Peru",
        "shipping_payment": "prepaid",
        "local_delivery": "yes",
        "needs_port_delivery": False,
        "delivery_address": None,
        "shipment_method": "container",
        "container_type": "40ft",
        "cargo_type": "commercial",
        "cargo_details": "furniture",
        "document_status": {
            "bill_of_lading": "received",
            "commercial_invoice": "pending",
            "packing_list": "",
        },
        "session_id": "sess-42",
    }


@pytest.fixture
def export_submission() -> Dict[str, Any]:
    return {
        "first_name": "Kai",
        "email": "kai@example.com",
        "direction": "export",
        "goods_location": "Warehouse 3",
        "customs_code_number": "CC-0001",
        "export_service_needed": "documentation",
        "destination_country": "Japan",
        "shipment_method": "air",
        "air_weight_category": "under_100kg",
        "personal_item_mixed": True,
    }
