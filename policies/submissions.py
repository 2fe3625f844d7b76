from typing import Dict, Tuple, Any

RECORD_ID_FIELD = "airtable_record_id"
DIRECTION_FIELD = "direction"
DOCUMENT_STATUS_FIELD = "document_status"

DIRECTION_IMPORT = "import"
DIRECTION_EXPORT = "export"

# copied verbatim, in the order AirTable receives them
CONTACT_FIELDS: Tuple[str, ...] = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "company_name",
    "customer_type",
    "consent_checkbox",
)

CLASSIFICATION_FIELDS: Tuple[str, ...] = (
    DIRECTION_FIELD,
)

# only when direction == "import"
IMPORT_FIELDS: Tuple[str, ...] = (
    "goods_location",
    "arrival_method",
    "arrival_timeline",
    "customs_code_status",
    "customs_code_number",
)

# only when direction == "export"
EXPORT_FIELDS: Tuple[str, ...] = (
    "export_service_needed",
    "destination_country",
)

SERVICE_FIELDS: Tuple[str, ...] = (
    "shipping_payment",
    "local_delivery",
    "needs_port_delivery",
    "delivery_address",
    "shipment_method",
    "container_type",
    "air_weight_category",
)

CARGO_FIELDS: Tuple[str, ...] = (
    "cargo_type",
    "cargo_details",
    "other_cargo_description",
    "personal_item_condition",
)

# falsy or missing values become False
CARGO_FLAG_FIELDS: Tuple[str, ...] = (
    "personal_item_mixed",
    "requires_temperature_control",
)

PACKING_FIELDS: Tuple[str, ...] = (
    "packing_info_combined",
)

# document_status.<key> -> <column>
DOCUMENT_STATUS_COLUMNS: Dict[str, str] = {
    "air_waybill": "air_waybill_status",
    "bill_of_lading": "bill_of_lading_status",
    "courier_receipt": "courier_receipt_status",
    "commercial_invoice": "commercial_invoice_status",
    "packing_list": "packing_list_status",
    "export_declaration": "export_declaration_status",
    "msds": "msds_status",
}

STATUS_FIELD = "status"
DEFAULT_STATUS = "completed"

SYSTEM_FIELDS: Tuple[str, ...] = (
    "session_id",
)

# fields the server always controls (never from client)
AUTOMATION_TRACKING_DEFAULTS: Dict[str, Any] = {
    "reminder_sent": False,
    "follow_up_sent": False,
    "sales_manager_notified": False,
    "email_sequence_stage": "none",
}
