"""Update Customer — conflict-checked partial updates.

Invariants:
    - Unknown keys (and id) in a partial update are rejected before any storage call
    - Email is checked before document number; the first conflict found wins
    - Setting email/document_num to the record's own current value is never a conflict
    - The merged entity is re-validated before the write; stored records stay valid
    - update_many applies execute() per matched record, sequentially, no short-circuit

Design Decisions:
    - Conflict probe ignores a match on the record being updated (same id)
    - update_many uses find_all + execute rather than the port's bulk update, so every
      record goes through the same conflict checks and gets its own OperationResult
"""

import logging
from collections.abc import Mapping
from typing import Any

from customer_registry.core.customer import Customer
from customer_registry.core.domain_types import MUTABLE_FIELDS, CustomerField
from customer_registry.core.errors import (
    CustomerConflictError, CustomerNotFoundError, CustomerRegistryError,
    CustomerValidationError, ErrorCategory, ErrorContext, StorageError,
)
from customer_registry.core.operation_result import OperationResult
from customer_registry.core.query_spec import CustomerFilter
from customer_registry.core.repository_protocols import CustomerRepository

logger = logging.getLogger(__name__)

_CONFLICT_MESSAGES = {
    CustomerField.EMAIL: "Email {} is already in use",
    CustomerField.DOCUMENT_NUM: "Document number {} is already in use",
}


class UpdateCustomer:
    """Update use case."""

    def __init__(self, repository: CustomerRepository):
        self.repository = repository

    async def execute(
        self, customer_id: str, changes: Mapping[str, Any],
    ) -> OperationResult:
        try:
            updated = await self._update(customer_id, changes)
        except StorageError as e:
            logger.error(
                f"Storage failure updating customer {customer_id}: {e.message}",
                extra={"customer_id": customer_id, "operation": "update"},
            )
            return OperationResult.fail(
                f"Unexpected error during customer update: {e.message}",
                e.category,
            )
        except CustomerRegistryError as e:
            logger.info(
                f"Customer update rejected: {e.message}",
                extra={**e.log_extra(), "customer_id": customer_id, "operation": "update"},
            )
            return OperationResult.fail(e.message, e.category)
        except Exception:
            logger.error(
                f"Unexpected error updating customer {customer_id}", exc_info=True,
            )
            return OperationResult.fail(
                "Unexpected error during customer update", ErrorCategory.INTERNAL,
            )
        return OperationResult.ok(updated)

    async def update_many(
        self, criteria: CustomerFilter, changes: Mapping[str, Any],
    ) -> list[OperationResult]:
        try:
            customers = await self.repository.find_all(criteria)
        except StorageError as e:
            logger.error(f"Storage failure selecting customers to update: {e.message}")
            return [OperationResult.fail(
                f"Error fetching customers to update: {e.message}", e.category,
            )]

        results = []
        for customer in customers:
            results.append(await self.execute(str(customer.id), changes))
        return results

    async def _update(
        self, customer_id: str, changes: Mapping[str, Any],
    ) -> Customer:
        fields = _parse_changes(changes)

        existing = await self.repository.find_by_id(customer_id)
        if existing is None:
            raise CustomerNotFoundError(
                f"Customer with id {customer_id} not found",
                ErrorContext(customer_id=customer_id),
            )

        for customer_field in (CustomerField.EMAIL, CustomerField.DOCUMENT_NUM):
            await self._check_available(existing, customer_field, fields.get(customer_field))

        existing.evolve(changes)

        updated = await self.repository.update_by_id(customer_id, changes)
        if updated is None:
            raise CustomerNotFoundError(
                "Failed to update customer", ErrorContext(customer_id=customer_id),
            )
        return updated

    async def _check_available(
        self, existing: Customer, customer_field: CustomerField, value: Any,
    ) -> None:
        # the write stores trimmed text, so the probe must too
        if isinstance(value, str):
            value = value.strip()
        if not value or value == existing.get(customer_field):
            return
        holder = await self.repository.find_by_field(customer_field, value)
        if holder is not None and str(holder.id) != str(existing.id):
            raise CustomerConflictError(
                _CONFLICT_MESSAGES[customer_field].format(value),
                customer_field.value, value,
                ErrorContext(customer_id=str(existing.id)),
            )


def _parse_changes(changes: Mapping[str, Any]) -> dict[CustomerField, Any]:
    fields: dict[CustomerField, Any] = {}
    unknown = []
    for key, value in changes.items():
        try:
            customer_field = CustomerField.parse(key)
        except ValueError:
            unknown.append(str(key))
            continue
        if customer_field not in MUTABLE_FIELDS:
            unknown.append(str(key))
            continue
        fields[customer_field] = value
    if unknown:
        raise CustomerValidationError(
            f"Unknown customer field(s): {', '.join(sorted(unknown))}",
        )
    return fields
