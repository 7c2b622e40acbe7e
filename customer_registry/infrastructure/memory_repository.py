"""In-Memory Customer Repository — dict-backed CustomerRepository for tests and local runs.

Invariants:
    - Records keyed by str(id); insertion order preserved (find_all/search are stable)
    - Updates replace the stored entity with Customer.evolve(), never mutated in place
    - create() rejects a duplicate id, document_num or email with StorageError,
      mirroring the unique constraints of the SQL schema

Design Decisions:
    - Filter/sort/projection semantics delegated to core/query_spec.py
    - No lock: every method is free of awaits between read and write, so a single
      event loop cannot interleave inside one call
"""

from collections.abc import Mapping
from typing import Any

from customer_registry.core.customer import Customer
from customer_registry.core.domain_types import CustomerField
from customer_registry.core.errors import CustomerRegistryError, StorageError
from customer_registry.core.operation_result import OperationResult
from customer_registry.core.query_spec import (
    CustomerFilter, ProjectedRow, SearchOptions, coerce_value,
)

_UNIQUE_FIELDS = (CustomerField.DOCUMENT_NUM, CustomerField.EMAIL)


class InMemoryCustomerRepository:
    """CustomerRepository backed by a plain dict."""

    def __init__(self):
        self._customers: dict[str, Customer] = {}

    def clear(self) -> None:
        self._customers.clear()

    async def create(self, customer: Customer) -> Customer:
        key = str(customer.id)
        if key in self._customers:
            raise StorageError(f"duplicate id {key}", "create")
        self._check_unique(customer, "create")
        self._customers[key] = customer
        return customer

    async def find_by_id(self, customer_id: str) -> Customer | None:
        return self._customers.get(str(customer_id))

    async def find_by_field(
        self, field: CustomerField, value: Any,
    ) -> Customer | None:
        return self._first(field, coerce_value(field, value))

    async def find_all(self, criteria: CustomerFilter) -> list[Customer]:
        return [c for c in self._customers.values() if criteria.matches(c)]

    async def update_by_id(
        self, customer_id: str, changes: Mapping[str, Any],
    ) -> Customer | None:
        key = str(customer_id)
        current = self._customers.get(key)
        if current is None:
            return None
        updated = current.evolve(changes)
        self._check_unique(updated, "update")
        self._customers[key] = updated
        return updated

    async def update_many(
        self, criteria: CustomerFilter, changes: Mapping[str, Any],
    ) -> list[OperationResult]:
        results = []
        for customer in await self.find_all(criteria):
            try:
                updated = await self.update_by_id(str(customer.id), changes)
            except CustomerRegistryError as e:
                results.append(OperationResult.fail(e.message, e.category))
                continue
            results.append(OperationResult.ok(updated))
        return results

    async def delete_by_id(self, customer_id: str) -> bool:
        return self._customers.pop(str(customer_id), None) is not None

    async def delete_by_document_number(self, document_num: str) -> bool:
        customer = self._first(CustomerField.DOCUMENT_NUM, document_num)
        if customer is None:
            return False
        del self._customers[str(customer.id)]
        return True

    async def count(self, criteria: CustomerFilter) -> int:
        return len(await self.find_all(criteria))

    async def exists_by_id(self, customer_id: str) -> bool:
        return str(customer_id) in self._customers

    async def search(
        self, criteria: CustomerFilter, options: SearchOptions | None = None,
    ) -> list[Customer] | list[ProjectedRow]:
        matches = await self.find_all(criteria)
        if options is None:
            return matches
        return options.apply(matches)

    def _check_unique(self, customer: Customer, operation: str) -> None:
        for customer_field in _UNIQUE_FIELDS:
            holder = self._first(customer_field, customer.get(customer_field))
            if holder is not None and str(holder.id) != str(customer.id):
                raise StorageError(f"duplicate {customer_field.value}", operation)

    def _first(self, field: CustomerField, value: Any) -> Customer | None:
        probe = CustomerFilter({field: value})
        return next(
            (c for c in self._customers.values() if probe.matches(c)), None,
        )
