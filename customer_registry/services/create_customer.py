"""Create Customer — uniqueness-checked creation with post-write verification.

Invariants:
    - document_num is probed before email; the first conflict found stops the flow
    - Entity construction runs only after both probes pass; non-text values skip
      the probe and are rejected by Customer.create
    - A created record that cannot be re-fetched by id is reported as a failure
    - create_many processes items strictly in order, one at a time, so a later
      item sees records created earlier in the same batch
    - No exception leaves execute(): every path returns an OperationResult

Design Decisions:
    - Probes are advisory (check-then-act, no atomicity); unique constraints in the
      storage backend are the real guard against concurrent writers
    - Failures raised as typed errors inside _create(), translated once at the boundary
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from customer_registry.core.customer import Customer, new_customer_id, normalize_fields
from customer_registry.core.domain_types import CustomerField
from customer_registry.core.errors import (
    CustomerConflictError, CustomerIntegrityError, CustomerRegistryError,
    ErrorCategory, StorageError,
)
from customer_registry.core.operation_result import OperationResult
from customer_registry.core.repository_protocols import CustomerRepository

logger = logging.getLogger(__name__)

_CONFLICT_MESSAGES = {
    CustomerField.DOCUMENT_NUM: "Customer with document number {} already exists",
    CustomerField.EMAIL: "Customer with email {} already exists",
}


class CreateCustomer:
    """Create use case."""

    def __init__(
        self,
        repository: CustomerRepository,
        id_factory: Callable[[], str | int] = new_customer_id,
    ):
        self.repository = repository
        self.id_factory = id_factory

    async def execute(self, fields: Mapping[str, Any]) -> OperationResult:
        try:
            customer = await self._create(fields)
        except StorageError as e:
            logger.error(
                f"Storage failure creating customer: {e.message}",
                extra={"operation": "create", "error_code": e.code},
            )
            return OperationResult.fail(
                f"Unexpected error during customer creation: {e.message}",
                e.category,
            )
        except CustomerRegistryError as e:
            logger.info(
                f"Customer creation rejected: {e.message}",
                extra={**e.log_extra(), "operation": "create"},
            )
            return OperationResult.fail(e.message, e.category)
        except Exception:
            logger.error("Unexpected error during customer creation", exc_info=True)
            return OperationResult.fail(
                "Unexpected error during customer creation", ErrorCategory.INTERNAL,
            )
        logger.info(
            "Customer created", extra={"customer_id": str(customer.id), "operation": "create"},
        )
        return OperationResult.ok(customer)

    async def create_many(
        self, items: list[Mapping[str, Any]],
    ) -> list[OperationResult]:
        results = []
        for fields in items:
            results.append(await self.execute(fields))
        return results

    async def _create(self, fields: Mapping[str, Any]) -> Customer:
        values = normalize_fields(fields)

        for customer_field in (CustomerField.DOCUMENT_NUM, CustomerField.EMAIL):
            await self._check_unused(customer_field, values.get(customer_field))

        customer = Customer.create(fields, id_factory=self.id_factory)
        created = await self.repository.create(customer)

        verified = await self.repository.find_by_id(str(created.id))
        if verified is None:
            raise CustomerIntegrityError(
                "Customer creation failed: Unable to verify created customer",
            )
        return created

    async def _check_unused(self, customer_field: CustomerField, value: Any) -> None:
        # non-text values are left for Customer.create to reject
        if not isinstance(value, str):
            return
        value = value.strip()
        if await self.repository.find_by_field(customer_field, value) is not None:
            raise CustomerConflictError(
                _CONFLICT_MESSAGES[customer_field].format(value),
                customer_field.value, value,
            )
