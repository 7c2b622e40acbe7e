"""Get Customer — read-side wrapper turning port results into OperationResults.

Invariants:
    - Present result → success; absent single-record lookup → named failure
    - Storage errors and rejected query input (e.g. a malformed date) become
      failures prefixed with an operation label, keeping their category
    - Nothing raised by the port escapes
"""

import logging
from collections.abc import Awaitable
from typing import Any, TypeVar

from customer_registry.core.domain_types import CustomerField
from customer_registry.core.errors import (
    CustomerRegistryError, ErrorCategory, StorageError,
)
from customer_registry.core.operation_result import OperationResult
from customer_registry.core.query_spec import CustomerFilter, SearchOptions
from customer_registry.core.repository_protocols import CustomerRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class GetCustomer:
    """Read use cases."""

    def __init__(self, repository: CustomerRepository):
        self.repository = repository

    async def execute(self, customer_id: str) -> OperationResult:
        return await self._read(
            self.repository.find_by_id(customer_id),
            "Error fetching customer",
            missing="Customer not found",
        )

    async def find_all(self, criteria: CustomerFilter) -> OperationResult:
        return await self._read(
            self.repository.find_all(criteria), "Error fetching customers",
        )

    async def find_by_field(
        self, field: CustomerField, value: Any,
    ) -> OperationResult:
        return await self._read(
            self.repository.find_by_field(field, value),
            "Error fetching customer by field",
            missing=f"Customer not found with {field.wire_name}: {value}",
        )

    async def count(self, criteria: CustomerFilter) -> OperationResult:
        return await self._read(
            self.repository.count(criteria), "Error counting customers",
        )

    async def exists_by_id(self, customer_id: str) -> OperationResult:
        return await self._read(
            self.repository.exists_by_id(customer_id),
            "Error checking customer existence",
        )

    async def search(
        self, criteria: CustomerFilter, options: SearchOptions | None = None,
    ) -> OperationResult:
        return await self._read(
            self.repository.search(criteria, options), "Error searching customers",
        )

    async def _read(
        self, call: Awaitable[T], label: str, missing: str | None = None,
    ) -> OperationResult:
        try:
            value = await call
        except StorageError as e:
            logger.error(f"{label}: {e.message}", extra=e.log_extra())
            return OperationResult.fail(f"{label}: {e.message}", e.category)
        except CustomerRegistryError as e:
            logger.info(f"{label}: {e.message}", extra=e.log_extra())
            return OperationResult.fail(f"{label}: {e.message}", e.category)
        except Exception:
            logger.error(label, exc_info=True)
            return OperationResult.fail(
                f"{label}: unexpected error", ErrorCategory.INTERNAL,
            )
        if missing is not None and value is None:
            return OperationResult.fail(missing, ErrorCategory.RESOURCE_NOT_FOUND)
        return OperationResult.ok(value)
