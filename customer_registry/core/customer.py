"""Customer Entity — validated, immutable customer record.

Invariants:
    - All five fields are always present on a constructed Customer
    - create() either returns a fully valid entity or raises CustomerValidationError
    - Validation order is fixed: type → emptiness → document length → date format/type → date sanity
    - Entities never change after construction; evolve() builds a new one through create()
    - Uniqueness of document_num/email is NOT checked here (use cases own it)

Design Decisions:
    - frozen dataclass over private-constructor class: immutability enforced by Python itself
    - id_factory injected: construction stays deterministic under test
    - datetime accepted for date_birthday, checked against the current moment,
      stored as its calendar date (the field is a calendar date)
"""

import re
import uuid
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from customer_registry.core.domain_types import CustomerField
from customer_registry.core.errors import CustomerValidationError

DOCUMENT_NUM_MIN_LENGTH = 11

_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def new_customer_id() -> str:
    """Default id factory: random uuid4 text."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Customer:
    """Customer record. Build through Customer.create(), never directly."""
    id: str | int
    name: str
    document_num: str
    date_birthday: date
    email: str

    @classmethod
    def create(
        cls,
        fields: Mapping[str, Any],
        id_factory: Callable[[], str | int] = new_customer_id,
    ) -> "Customer":
        """Validate raw fields and build a Customer.

        ``fields`` may use Python names (``document_num``) or wire names
        (``documentNum``). Raises CustomerValidationError on the first
        violated rule.
        """
        values = normalize_fields(fields)
        name = values.get(CustomerField.NAME)
        document_num = values.get(CustomerField.DOCUMENT_NUM)
        email = values.get(CustomerField.EMAIL)

        if not all(isinstance(v, str) for v in (name, document_num, email)):
            raise CustomerValidationError(
                "Name, document number, and email must be strings",
            )

        name, document_num, email = name.strip(), document_num.strip(), email.strip()
        if not name or not document_num or not email:
            raise CustomerValidationError("All fields must be filled")

        if len(document_num) < DOCUMENT_NUM_MIN_LENGTH:
            raise CustomerValidationError(
                f"Document number must be at least {DOCUMENT_NUM_MIN_LENGTH} characters long",
            )

        birthday = _resolve_birth_date(values.get(CustomerField.DATE_BIRTHDAY))

        customer_id = values.get(CustomerField.ID)
        if customer_id is None or customer_id == "":
            customer_id = id_factory()

        return cls(
            id=customer_id,
            name=name,
            document_num=document_num,
            date_birthday=birthday,
            email=email,
        )

    def evolve(self, changes: Mapping[str, Any]) -> "Customer":
        """Return a new, re-validated Customer with ``changes`` applied. Id is kept."""
        merged = {f: getattr(self, f.value) for f in CustomerField}
        merged.update(normalize_fields(changes))
        merged[CustomerField.ID] = self.id
        return Customer.create({f.value: v for f, v in merged.items()})

    def get(self, field: CustomerField) -> Any:
        return getattr(self, field.value)

    def to_dict(self) -> dict:
        """Serialize with wire field names."""
        return {
            "id": self.id,
            "name": self.name,
            "documentNum": self.document_num,
            "dateBirthday": self.date_birthday.isoformat(),
            "email": self.email,
        }


def normalize_fields(fields: Mapping[str, Any]) -> dict[CustomerField, Any]:
    """Map Python/wire names to CustomerField. Unknown keys are ignored here."""
    normalized: dict[CustomerField, Any] = {}
    for key, value in fields.items():
        try:
            normalized[CustomerField.parse(key)] = value
        except ValueError:
            continue
    return normalized


def _resolve_birth_date(value: Any) -> date:
    if isinstance(value, str):
        parsed = _parse_strict_date(value)
        if parsed is None:
            raise CustomerValidationError(
                "Invalid date format or value. Use YYYY-MM-DD and ensure it's a valid date.",
            )
        value = parsed
    elif not isinstance(value, date):
        raise CustomerValidationError("Invalid date type")

    if isinstance(value, datetime):
        now = datetime.now(value.tzinfo)
        if value > now:
            raise CustomerValidationError("Invalid birth date")
        return value.date()

    if value > date.today():
        raise CustomerValidationError("Invalid birth date")
    return value


def _parse_strict_date(text: str) -> date | None:
    """YYYY-MM-DD that names a real calendar day, else None."""
    if not _DATE_PATTERN.fullmatch(text):
        return None
    year, month, day = (int(part) for part in text.split("-"))
    try:
        return date(year, month, day)
    except ValueError:
        return None
