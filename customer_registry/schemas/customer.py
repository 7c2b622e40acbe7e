"""Customer Schemas — Pydantic models for the customer API boundary.

Invariants:
    - Request field names follow the wire format (documentNum, dateBirthday);
      Python names are accepted too (populate_by_name)
    - Schemas check shape only; Customer.create remains the single authority on
      what a valid customer is (dates travel as text and are parsed there)
    - CustomerUpdate forbids unknown fields and never carries an id

Design Decisions:
    - Sort keys as an ordered list of {field, direction}: JSON objects do not
      reliably preserve key order across clients
"""

from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class CustomerCreate(BaseModel):
    """Customer creation payload."""
    model_config = ConfigDict(populate_by_name=True)

    id: str | int | None = None
    name: str | None = None
    document_num: str | None = Field(None, alias="documentNum")
    date_birthday: str | date | None = Field(None, alias="dateBirthday")
    email: str | None = None

    def to_fields(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class CustomerUpdate(BaseModel):
    """Partial update payload; only the fields that were sent are applied."""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: str | None = None
    document_num: str | None = Field(None, alias="documentNum")
    date_birthday: str | date | None = Field(None, alias="dateBirthday")
    email: str | None = None

    def to_changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class SortKeySchema(BaseModel):
    field: str
    direction: Literal["asc", "desc"] = "asc"


class SearchRequest(BaseModel):
    """POST /customers/search body."""
    filter: dict[str, Any] = Field(default_factory=dict)
    sort: list[SortKeySchema] = Field(default_factory=list)
    projection: list[str] | None = None


class UpdateManyRequest(BaseModel):
    """PUT /customers body: apply the same changes to every match."""
    filter: dict[str, Any] = Field(default_factory=dict)
    changes: CustomerUpdate


class DeleteManyRequest(BaseModel):
    filter: dict[str, Any] = Field(default_factory=dict)


class OperationResultResponse(BaseModel):
    """Serialized OperationResult: exactly success, data, error."""
    success: bool
    data: Any = None
    error: str | None = None
