"""Use Case Wiring — FastAPI dependencies that build use cases over the configured port.

Invariants:
    - Routes obtain use cases only through these providers (tests override get_repository)
    - storage_backend="memory" shares one InMemoryCustomerRepository per process
    - storage_backend="sql" wraps the db_manager initialized in the app lifespan

Design Decisions:
    - Use cases are cheap, stateless objects: built per request, no caching
"""

from fastapi import Depends

from customer_registry.config import get_settings
from customer_registry.core.repository_protocols import CustomerRepository
from customer_registry.infrastructure.database import get_db_manager
from customer_registry.infrastructure.memory_repository import InMemoryCustomerRepository
from customer_registry.infrastructure.sql_repository import SqlCustomerRepository
from customer_registry.services.create_customer import CreateCustomer
from customer_registry.services.delete_customer import DeleteCustomer
from customer_registry.services.get_customer import GetCustomer
from customer_registry.services.update_customer import UpdateCustomer

_memory_repository = InMemoryCustomerRepository()


def get_repository() -> CustomerRepository:
    if get_settings().storage_backend == "memory":
        return _memory_repository
    return SqlCustomerRepository(get_db_manager())


def get_create_customer(
    repository: CustomerRepository = Depends(get_repository),
) -> CreateCustomer:
    return CreateCustomer(repository)


def get_get_customer(
    repository: CustomerRepository = Depends(get_repository),
) -> GetCustomer:
    return GetCustomer(repository)


def get_update_customer(
    repository: CustomerRepository = Depends(get_repository),
) -> UpdateCustomer:
    return UpdateCustomer(repository)


def get_delete_customer(
    repository: CustomerRepository = Depends(get_repository),
) -> DeleteCustomer:
    return DeleteCustomer(repository)
