"""
Submission entity models.
Both models are transient: built per request and discarded with the response.
"""

from typing import Optional, Dict, Any
from dataclasses import dataclass
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class Direction(str, Enum):
    IMPORT = "import"
    EXPORT = "export"


class SubmissionOperation(str, Enum):
    CREATE = "create"
    UPDATE = "update"

    @property
    def http_method(self) -> str:
        return "PATCH" if self is SubmissionOperation.UPDATE else "POST"


class RecordPayload(BaseModel):
    """Outbound body sent to AirTable: `{"fields": {...}}`."""

    fields: Dict[str, Any] = Field(default_factory=dict, description="Cleaned record fields")


class AirtableRecord(BaseModel):
    """
    Record returned by the AirTable API.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[str] = Field(None, description="AirTable record identifier")
    created_time: Optional[str] = Field(None, alias="createdTime", description="Creation timestamp")
    fields: Dict[str, Any] = Field(default_factory=dict, description="Stored record fields")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AirtableRecord':
        if not isinstance(data, dict):
            return cls()
        return cls.model_validate(data)


@dataclass
class RelayResponse:
    """Transport-neutral result of one relay run."""

    status_code: int
    body: Optional[Dict[str, Any]] = None

    @property
    def is_empty(self) -> bool:
        return self.body is None
