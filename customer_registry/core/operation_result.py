"""Operation Result — the success/failure outcome returned by every use case.

Invariants:
    - success=True  → error is None, data holds the payload
    - success=False → data is None, error holds a human-readable message
    - to_dict() always has exactly three keys: success, data, error

Design Decisions:
    - category kept on failures but excluded from to_dict(): the transport maps
      it to a status code, the serialized contract stays three fields
    - Payload serialization lives here so every transport renders it the same way
"""

from dataclasses import dataclass, field
from typing import Any

from customer_registry.core.customer import Customer
from customer_registry.core.errors import ErrorCategory


@dataclass(frozen=True)
class OperationResult:
    success: bool
    data: Any = None
    error: str | None = None
    category: ErrorCategory | None = field(default=None, compare=False)

    def __post_init__(self):
        if self.success and self.error is not None:
            raise ValueError("successful result cannot carry an error")
        if not self.success and (self.data is not None or not self.error):
            raise ValueError("failed result needs an error message and no data")

    @classmethod
    def ok(cls, data: Any) -> "OperationResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(
        cls, error: str, category: ErrorCategory = ErrorCategory.INTERNAL,
    ) -> "OperationResult":
        return cls(success=False, error=error, category=category)

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "data": _serialize(self.data),
            "error": self.error,
        }


def _serialize(value: Any) -> Any:
    if isinstance(value, Customer):
        return value.to_dict()
    if isinstance(value, list):
        return [_serialize(v) for v in value]
    return value
