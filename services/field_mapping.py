"""
Field mapping for form submissions.

Turns the flat browser submission into the AirTable record fields and strips
the values AirTable refuses (empty strings are rejected by single-select
columns).
"""

from typing import Any, Dict, Iterable, Mapping, Optional

from entities.submission import Direction, RecordPayload, SubmissionOperation
from policies.submissions import (
    AUTOMATION_TRACKING_DEFAULTS,
    CARGO_FIELDS,
    CARGO_FLAG_FIELDS,
    CLASSIFICATION_FIELDS,
    CONTACT_FIELDS,
    DEFAULT_STATUS,
    DIRECTION_FIELD,
    DOCUMENT_STATUS_COLUMNS,
    DOCUMENT_STATUS_FIELD,
    EXPORT_FIELDS,
    IMPORT_FIELDS,
    PACKING_FIELDS,
    RECORD_ID_FIELD,
    SERVICE_FIELDS,
    STATUS_FIELD,
    SYSTEM_FIELDS,
)


def _copy(submission: Mapping[str, Any], names: Iterable[str]) -> Dict[str, Any]:
    return {name: submission.get(name) for name in names}


def _direction_fields(submission: Mapping[str, Any]) -> Dict[str, Any]:
    direction = submission.get(DIRECTION_FIELD)
    if direction == Direction.IMPORT.value:
        return _copy(submission, IMPORT_FIELDS)
    if direction == Direction.EXPORT.value:
        return _copy(submission, EXPORT_FIELDS)
    return {}


def _document_status_fields(submission: Mapping[str, Any]) -> Dict[str, Any]:
    document_status = submission.get(DOCUMENT_STATUS_FIELD)
    if not isinstance(document_status, Mapping):
        document_status = {}
    return {
        column: document_status.get(key)
        for key, column in DOCUMENT_STATUS_COLUMNS.items()
    }


def build_record_fields(submission: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Build the raw (uncleaned) record fields for a submission.

    Import-only and export-only fields are merged in depending on the
    `direction` value; any other direction gets neither set. Automation
    tracking fields are always reset to their defaults.
    """
    fields: Dict[str, Any] = {}
    fields.update(_copy(submission, CONTACT_FIELDS))
    fields.update(_copy(submission, CLASSIFICATION_FIELDS))
    fields.update(_direction_fields(submission))
    fields.update(_copy(submission, SERVICE_FIELDS))
    fields.update(_copy(submission, CARGO_FIELDS))
    for name in CARGO_FLAG_FIELDS:
        fields[name] = submission.get(name) or False
    fields.update(_copy(submission, PACKING_FIELDS))
    fields.update(_document_status_fields(submission))
    fields[STATUS_FIELD] = submission.get(STATUS_FIELD) or DEFAULT_STATUS
    fields.update(_copy(submission, SYSTEM_FIELDS))
    fields.update(AUTOMATION_TRACKING_DEFAULTS)
    return fields


def is_empty_value(value: Any) -> bool:
    # booleans are meaningful even when False
    if isinstance(value, bool):
        return False
    return value is None or value == ""


def clean_fields(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop entries whose value is None or an empty string."""
    return {key: value for key, value in fields.items() if not is_empty_value(value)}


def build_record_payload(submission: Mapping[str, Any]) -> RecordPayload:
    return RecordPayload(fields=clean_fields(build_record_fields(submission)))


def get_record_id(submission: Mapping[str, Any]) -> Optional[str]:
    """Return the record id to update, or None when a new record is wanted."""
    record_id = submission.get(RECORD_ID_FIELD)
    if not record_id:
        return None
    return str(record_id)


def resolve_operation(submission: Mapping[str, Any]) -> SubmissionOperation:
    if get_record_id(submission):
        return SubmissionOperation.UPDATE
    return SubmissionOperation.CREATE
