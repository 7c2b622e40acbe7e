"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - CustomerField is the closed set of customer attributes; every field name
      coming from outside (filters, sort keys, projections, updates) is parsed into it
    - Each field has one Python name (snake_case) and one wire name (camelCase)
    - All valid states encoded as Enums, no raw string matching

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum


# ─── Enums ───────────────────────────────────────────────────────

class CustomerField(str, Enum):
    """Customer attributes; value is the Python attribute name."""
    ID = "id"
    NAME = "name"
    DOCUMENT_NUM = "document_num"
    DATE_BIRTHDAY = "date_birthday"
    EMAIL = "email"

    @property
    def wire_name(self) -> str:
        """Name used in JSON payloads."""
        return _WIRE_NAMES[self]

    @classmethod
    def parse(cls, name: str) -> "CustomerField":
        """Resolve a Python or wire field name. Raises ValueError if unknown."""
        if isinstance(name, cls):
            return name
        for member in cls:
            if name in (member.value, member.wire_name):
                return member
        raise ValueError(f"Unknown customer field: {name}")


_WIRE_NAMES = {
    CustomerField.ID: "id",
    CustomerField.NAME: "name",
    CustomerField.DOCUMENT_NUM: "documentNum",
    CustomerField.DATE_BIRTHDAY: "dateBirthday",
    CustomerField.EMAIL: "email",
}

# Fields a partial update may touch; id is immutable
MUTABLE_FIELDS = frozenset({
    CustomerField.NAME,
    CustomerField.DOCUMENT_NUM,
    CustomerField.DATE_BIRTHDAY,
    CustomerField.EMAIL,
})


class SortDirection(str, Enum):
    """Sort order for a single search key."""
    ASCENDING = "asc"
    DESCENDING = "desc"

    @classmethod
    def parse(cls, value: "str | int | SortDirection") -> "SortDirection":
        """Accept asc/desc (any case), ascending/descending, or 1/-1."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid sort direction: {value}")
        if value == 1:
            return cls.ASCENDING
        if value == -1:
            return cls.DESCENDING
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in ("asc", "ascending", "1"):
                return cls.ASCENDING
            if lowered in ("desc", "descending", "-1"):
                return cls.DESCENDING
        raise ValueError(f"Invalid sort direction: {value}")
