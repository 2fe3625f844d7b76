"""
Tests for the Lambda / Netlify style entry point.
"""

import base64
import json
from types import SimpleNamespace

import pytest

from api.serverless import build_handler, event_method, parse_event_body
from services.submission_relay import create_submission_relay


class TestEventParsing:

    def test_method_from_rest_event(self):
        assert event_method({"httpMethod": "POST"}) == "POST"

    def test_method_from_http_api_event(self):
        assert event_method({"requestContext": {"http": {"method": "PATCH"}}}) == "PATCH"

    def test_missing_method(self):
        assert event_method({}) is None

    def test_json_string_body(self):
        assert parse_event_body({"body": '{"email": "a@b.c"}'}) == {"email": "a@b.c"}

    def test_base64_body(self):
        encoded = base64.b64encode(b'{"email": "a@b.c"}').decode("ascii")
        assert parse_event_body({"body": encoded, "isBase64Encoded": True}) == {"email": "a@b.c"}

    def test_already_parsed_body(self):
        assert parse_event_body({"body": {"email": "a@b.c"}}) == {"email": "a@b.c"}

    @pytest.mark.parametrize("event", [{}, {"body": ""}, {"body": "{oops"}])
    def test_missing_or_invalid_body(self, event):
        assert parse_event_body(event) is None


class TestServerlessHandler:

    @pytest.fixture
    def handler(self, settings, fake_airtable):
        return build_handler(create_submission_relay(settings, transport=fake_airtable.transport), settings)

    def test_preflight(self, handler):
        response = handler({"httpMethod": "OPTIONS"}, None)

        assert response["statusCode"] == 200
        assert response["body"] == ""
        assert response["headers"]["Access-Control-Allow-Origin"] == "*"

    def test_create(self, handler, fake_airtable, export_submission):
        context = SimpleNamespace(aws_request_id="lambda-req-1")

        response = handler({"httpMethod": "POST", "body": json.dumps(export_submission)}, context)

        assert response["statusCode"] == 200
        assert response["headers"]["Content-Type"] == "application/json"
        assert response["headers"]["Access-Control-Allow-Methods"] == "POST, PATCH, OPTIONS"
        assert json.loads(response["body"]) == {
            "success": True,
            "recordId": "rec123",
            "message": "Form submitted successfully",
        }
        assert fake_airtable.last_fields["destination_country"] == "Japan"

    def test_method_not_allowed(self, handler):
        response = handler({"httpMethod": "GET"}, None)

        assert response["statusCode"] == 405
        assert json.loads(response["body"]) == {"success": False, "error": "Method not allowed"}

    def test_upstream_failure(self, handler, fake_airtable):
        fake_airtable.respond_with(400, {"error": {"message": "Invalid field"}})

        response = handler({"httpMethod": "PATCH", "body": '{"airtable_record_id": "rec1"}'}, None)

        assert response["statusCode"] == 500
        assert json.loads(response["body"]) == {"success": False, "error": "Invalid field"}

    def test_unparseable_body(self, handler, fake_airtable):
        response = handler({"httpMethod": "POST", "body": "not-json"}, None)

        assert response["statusCode"] == 500
        assert json.loads(response["body"])["success"] is False
        assert fake_airtable.requests == []
