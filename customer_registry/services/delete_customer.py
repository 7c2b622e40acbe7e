"""Delete Customer — single generic lookup-then-delete flow, plus concurrent bulk delete.

Invariants:
    - The deletion primitive is never invoked when the lookup finds nothing
    - "not found" (lookup miss) and "failed to delete" (lookup hit, removal reported
      False) are distinct failures
    - delete_many succeeds with exactly the records whose deletion succeeded;
      individual failures are dropped, not propagated

Design Decisions:
    - _delete takes lookup/remove callables plus an identifier-kind label:
      by-id and by-document-number share one decision tree
    - delete_many fans out with asyncio.gather: per-record deletions are independent,
      result order follows gather (input order), callers must not rely on it
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from customer_registry.core.customer import Customer
from customer_registry.core.domain_types import CustomerField
from customer_registry.core.errors import ErrorCategory, StorageError
from customer_registry.core.operation_result import OperationResult
from customer_registry.core.query_spec import CustomerFilter
from customer_registry.core.repository_protocols import CustomerRepository

logger = logging.getLogger(__name__)


class DeleteCustomer:
    """Delete use case."""

    def __init__(self, repository: CustomerRepository):
        self.repository = repository

    async def execute(self, customer_id: str) -> OperationResult:
        return await self._delete(
            lambda: self.repository.find_by_id(customer_id),
            lambda: self.repository.delete_by_id(customer_id),
            "id", customer_id,
        )

    async def execute_by_document_number(self, document_num: str) -> OperationResult:
        return await self._delete(
            lambda: self.repository.find_by_field(
                CustomerField.DOCUMENT_NUM, document_num,
            ),
            lambda: self.repository.delete_by_document_number(document_num),
            "document number", document_num,
        )

    async def delete_many(self, criteria: CustomerFilter) -> OperationResult:
        try:
            customers = await self.repository.find_all(criteria)
        except StorageError as e:
            logger.error(f"Storage failure selecting customers to delete: {e.message}")
            return OperationResult.fail(
                f"Error deleting customers: {e.message}", e.category,
            )

        results = await asyncio.gather(
            *(self.execute(str(c.id)) for c in customers),
        )
        deleted = [r.data for r in results if r.success]
        logger.info(
            f"Bulk delete removed {len(deleted)} of {len(customers)} matched customers",
        )
        return OperationResult.ok(deleted)

    async def _delete(
        self,
        lookup: Callable[[], Awaitable[Customer | None]],
        remove: Callable[[], Awaitable[bool]],
        kind: str,
        value: str,
    ) -> OperationResult:
        try:
            customer = await lookup()
            if customer is None:
                return OperationResult.fail(
                    f"Customer with {kind} {value} not found",
                    ErrorCategory.RESOURCE_NOT_FOUND,
                )
            if not await remove():
                logger.warning(
                    f"Customer with {kind} {value} vanished before deletion",
                    extra={"customer_id": str(customer.id), "operation": "delete"},
                )
                return OperationResult.fail(
                    f"Failed to delete customer with {kind} {value}",
                    ErrorCategory.INTEGRITY,
                )
        except StorageError as e:
            logger.error(
                f"Storage failure deleting customer with {kind} {value}: {e.message}",
                extra={"operation": "delete", "error_code": e.code},
            )
            return OperationResult.fail(
                f"Error deleting customer: {e.message}", e.category,
            )
        except Exception:
            logger.error(
                f"Unexpected error deleting customer with {kind} {value}", exc_info=True,
            )
            return OperationResult.fail(
                "Unexpected error during customer deletion", ErrorCategory.INTERNAL,
            )

        logger.info(
            "Customer deleted",
            extra={"customer_id": str(customer.id), "operation": "delete"},
        )
        return OperationResult.ok(customer)
