"""
Unit tests for submission field mapping and empty-value filtering.
"""

import pytest

from entities.submission import SubmissionOperation
from policies.submissions import EXPORT_FIELDS, IMPORT_FIELDS
from services.field_mapping import (
    build_record_fields,
    build_record_payload,
    clean_fields,
    get_record_id,
    is_empty_value,
    resolve_operation,
)


class TestCleanFields:

    def test_drops_empty_strings_and_none(self):
        cleaned = clean_fields({"a": "", "b": None, "c": "value", "d": 0})
        assert cleaned == {"c": "value", "d": 0}

    def test_keeps_booleans_including_false(self):
        cleaned = clean_fields({"yes": True, "no": False})
        assert cleaned == {"yes": True, "no": False}

    def test_keeps_whitespace_strings(self):
        assert clean_fields({"note": " "}) == {"note": " "}

    @pytest.mark.parametrize("value,expected", [
        ("", True),
        (None, True),
        (False, False),
        ("x", False),
        ([], False),
    ])
    def test_is_empty_value(self, value, expected):
        assert is_empty_value(value) is expected


class TestBuildRecordFields:

    def test_import_direction_includes_only_import_fields(self, import_submission):
        fields = build_record_payload(import_submission).fields

        assert fields["goods_location"] == "China"
        assert fields["arrival_method"] == "sea"
        assert fields["arrival_timeline"] == "1-2 weeks"
        assert fields["customs_code_status"] == "have_code"
        assert fields["customs_code_number"] == "CC-4411"
        for name in EXPORT_FIELDS:
            assert name not in fields

    def test_export_direction_includes_only_export_fields(self, export_submission):
        fields = build_record_payload(export_submission).fields

        assert fields["export_service_needed"] == "documentation"
        assert fields["destination_country"] == "Japan"
        for name in IMPORT_FIELDS:
            assert name not in fields

    def test_unknown_direction_includes_neither_set(self, import_submission):
        import_submission["direction"] = "domestic"
        fields = build_record_fields(import_submission)

        for name in IMPORT_FIELDS + EXPORT_FIELDS:
            assert name not in fields
        assert fields["direction"] == "domestic"

    def test_empty_values_are_removed(self, import_submission):
        fields = build_record_payload(import_submission).fields

        assert "phone" not in fields
        assert "delivery_address" not in fields
        assert "packing_list_status" not in fields
        assert fields["needs_port_delivery"] is False

    def test_document_status_is_flattened(self, import_submission):
        fields = build_record_payload(import_submission).fields

        assert fields["bill_of_lading_status"] == "received"
        assert fields["commercial_invoice_status"] == "pending"
        assert "air_waybill_status" not in fields
        assert "document_status" not in fields

    def test_non_mapping_document_status_is_ignored(self):
        fields = build_record_payload({"document_status": "all received"}).fields
        assert not any(name.endswith("_status") and name != "status" for name in fields)

    def test_defaults_for_missing_flags_and_status(self):
        fields = build_record_payload({}).fields

        assert fields == {
            "personal_item_mixed": False,
            "requires_temperature_control": False,
            "status": "completed",
            "reminder_sent": False,
            "follow_up_sent": False,
            "sales_manager_notified": False,
            "email_sequence_stage": "none",
        }

    def test_supplied_status_and_flags_are_kept(self, export_submission):
        export_submission["status"] = "partial"
        fields = build_record_payload(export_submission).fields

        assert fields["status"] == "partial"
        assert fields["personal_item_mixed"] is True

    def test_automation_tracking_fields_cannot_be_overridden(self):
        fields = build_record_payload({
            "reminder_sent": True,
            "email_sequence_stage": "stage_3",
        }).fields

        assert fields["reminder_sent"] is False
        assert fields["email_sequence_stage"] == "none"

    def test_unknown_inbound_fields_are_not_forwarded(self):
        fields = build_record_payload({"airtable_record_id": "rec1", "admin": True}).fields

        assert "airtable_record_id" not in fields
        assert "admin" not in fields

    def test_each_call_builds_a_fresh_mapping(self):
        first = build_record_fields({})
        first["reminder_sent"] = True

        assert build_record_fields({})["reminder_sent"] is False


class TestRecordId:

    def test_record_id_selects_update(self):
        submission = {"airtable_record_id": "recABC"}
        assert get_record_id(submission) == "recABC"
        assert resolve_operation(submission) is SubmissionOperation.UPDATE

    @pytest.mark.parametrize("submission", [{}, {"airtable_record_id": ""}, {"airtable_record_id": None}])
    def test_missing_or_empty_record_id_selects_create(self, submission):
        assert get_record_id(submission) is None
        assert resolve_operation(submission) is SubmissionOperation.CREATE
