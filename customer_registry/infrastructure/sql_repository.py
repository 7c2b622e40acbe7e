"""SQL Customer Repository — CustomerRepository over async SQLAlchemy.

Invariants:
    - One AsyncSession per port call (concurrent calls never share a session)
    - Every SQLAlchemy failure surfaces as StorageError (via DatabaseSessionManager)
    - Field names reach SQL only through the _COLUMNS map (closed CustomerField set)
    - Updates re-validate through Customer.evolve() before touching the row

Design Decisions:
    - Sorting pushed into SQL ORDER BY; projection applied after entity conversion
      so projected rows share one shape with the in-memory adapter
    - Unique constraints on document_num/email back the use cases' advisory probes
"""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete, func, select

from customer_registry.core.customer import Customer
from customer_registry.core.domain_types import CustomerField, SortDirection
from customer_registry.core.errors import CustomerValidationError
from customer_registry.core.operation_result import OperationResult
from customer_registry.core.query_spec import (
    CustomerFilter, ProjectedRow, SearchOptions, coerce_value, project,
)
from customer_registry.infrastructure.database import DatabaseSessionManager
from customer_registry.models.customer import CustomerRecord

logger = logging.getLogger(__name__)

_COLUMNS = {
    CustomerField.ID: CustomerRecord.id,
    CustomerField.NAME: CustomerRecord.name,
    CustomerField.DOCUMENT_NUM: CustomerRecord.document_num,
    CustomerField.DATE_BIRTHDAY: CustomerRecord.date_birthday,
    CustomerField.EMAIL: CustomerRecord.email,
}


def _where(criteria: CustomerFilter) -> list:
    clauses = []
    for customer_field, value in criteria.equals.items():
        if customer_field is CustomerField.ID:
            value = str(value)
        clauses.append(_COLUMNS[customer_field] == value)
    return clauses


class SqlCustomerRepository:
    """CustomerRepository persisted in the customers table."""

    def __init__(self, db_manager: DatabaseSessionManager):
        self.db_manager = db_manager

    async def create(self, customer: Customer) -> Customer:
        async with self.db_manager.session() as db:
            record = CustomerRecord.from_entity(customer)
            db.add(record)
            await db.commit()
            return record.to_entity()

    async def find_by_id(self, customer_id: str) -> Customer | None:
        async with self.db_manager.session() as db:
            record = await db.get(CustomerRecord, str(customer_id))
            return record.to_entity() if record else None

    async def find_by_field(
        self, field: CustomerField, value: Any,
    ) -> Customer | None:
        criteria = CustomerFilter({field: coerce_value(field, value)})
        async with self.db_manager.session() as db:
            result = await db.execute(
                select(CustomerRecord).where(*_where(criteria)).limit(1),
            )
            record = result.scalars().first()
            return record.to_entity() if record else None

    async def find_all(self, criteria: CustomerFilter) -> list[Customer]:
        async with self.db_manager.session() as db:
            result = await db.execute(
                select(CustomerRecord).where(*_where(criteria)),
            )
            return [r.to_entity() for r in result.scalars().all()]

    async def update_by_id(
        self, customer_id: str, changes: Mapping[str, Any],
    ) -> Customer | None:
        async with self.db_manager.session() as db:
            record = await db.get(CustomerRecord, str(customer_id))
            if record is None:
                return None
            updated = record.to_entity().evolve(changes)
            record.apply(updated)
            await db.commit()
            return updated

    async def update_many(
        self, criteria: CustomerFilter, changes: Mapping[str, Any],
    ) -> list[OperationResult]:
        results = []
        async with self.db_manager.session() as db:
            rows = await db.execute(
                select(CustomerRecord).where(*_where(criteria)),
            )
            for record in rows.scalars().all():
                try:
                    updated = record.to_entity().evolve(changes)
                except CustomerValidationError as e:
                    results.append(OperationResult.fail(e.message, e.category))
                    continue
                record.apply(updated)
                results.append(OperationResult.ok(updated))
            await db.commit()
        logger.info(f"Bulk update touched {len(results)} customers")
        return results

    async def delete_by_id(self, customer_id: str) -> bool:
        return await self._delete_where(CustomerRecord.id == str(customer_id))

    async def delete_by_document_number(self, document_num: str) -> bool:
        return await self._delete_where(CustomerRecord.document_num == document_num)

    async def count(self, criteria: CustomerFilter) -> int:
        async with self.db_manager.session() as db:
            result = await db.execute(
                select(func.count()).select_from(CustomerRecord).where(*_where(criteria)),
            )
            return result.scalar_one()

    async def exists_by_id(self, customer_id: str) -> bool:
        return await self.count(CustomerFilter({CustomerField.ID: customer_id})) > 0

    async def search(
        self, criteria: CustomerFilter, options: SearchOptions | None = None,
    ) -> list[Customer] | list[ProjectedRow]:
        options = options or SearchOptions()
        query = select(CustomerRecord).where(*_where(criteria))
        for key in options.sort:
            column = _COLUMNS[key.field]
            query = query.order_by(
                column.desc() if key.direction is SortDirection.DESCENDING else column.asc(),
            )
        async with self.db_manager.session() as db:
            result = await db.execute(query)
            customers = [r.to_entity() for r in result.scalars().all()]
        if options.projection is None:
            return customers
        return [project(c, options.projection) for c in customers]

    async def _delete_where(self, clause) -> bool:
        async with self.db_manager.session() as db:
            result = await db.execute(delete(CustomerRecord).where(clause))
            await db.commit()
            return result.rowcount > 0
