"""Boundary Protocols — the storage port between use cases and adapters.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Use cases reach storage exclusively through CustomerRepository
    - Every adapter failure surfaces as StorageError (core/errors.py); malformed
      query values (e.g. a non-ISO birthday) raise InvalidQueryError
    - update_by_id returns None when the id is unknown; delete_* return False
    - Id arguments are compared as text (str(id)). The memory adapter returns ids
      exactly as supplied; the SQL adapter stores the id column as text and
      returns str ids, so a customer created with id 7 reads back as "7"

Design Decisions:
    - Protocol over ABC: structural subtyping, adapters need no inheritance
    - Async in Protocol: boundary methods are async because implementations do IO
    - Queries take CustomerFilter/SearchOptions, never raw dicts (no dynamic attribute access)
"""

from collections.abc import Mapping
from typing import Any, Protocol

from customer_registry.core.customer import Customer
from customer_registry.core.domain_types import CustomerField
from customer_registry.core.operation_result import OperationResult
from customer_registry.core.query_spec import CustomerFilter, ProjectedRow, SearchOptions


class CustomerRepository(Protocol):
    """Contract for customer persistence, implemented by shell."""
    async def create(self, customer: Customer) -> Customer: ...
    async def find_by_id(self, customer_id: str) -> Customer | None: ...
    async def find_by_field(
        self, field: CustomerField, value: Any,
    ) -> Customer | None: ...
    async def find_all(self, criteria: CustomerFilter) -> list[Customer]: ...
    async def update_by_id(
        self, customer_id: str, changes: Mapping[str, Any],
    ) -> Customer | None: ...
    async def update_many(
        self, criteria: CustomerFilter, changes: Mapping[str, Any],
    ) -> list[OperationResult]: ...
    async def delete_by_id(self, customer_id: str) -> bool: ...
    async def delete_by_document_number(self, document_num: str) -> bool: ...
    async def count(self, criteria: CustomerFilter) -> int: ...
    async def exists_by_id(self, customer_id: str) -> bool: ...
    async def search(
        self, criteria: CustomerFilter, options: SearchOptions | None = None,
    ) -> list[Customer] | list[ProjectedRow]: ...
