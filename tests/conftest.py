"""Root conftest — shared test configuration and customer fixtures."""

import os

import pytest

from customer_registry.core.customer import Customer
from customer_registry.infrastructure.memory_repository import InMemoryCustomerRepository

# Ensure tests never reach a real database
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)


@pytest.fixture
def customer_fields():
    """Factory for valid raw customer input; keyword overrides replace fields."""
    def _make(**overrides):
        fields = {
            "name": "John Doe",
            "documentNum": "12345678901",
            "dateBirthday": "1990-01-01",
            "email": "john@example.com",
        }
        fields.update(overrides)
        return fields
    return _make


@pytest.fixture
def make_customer(customer_fields):
    """Factory for valid Customer entities."""
    def _make(**overrides):
        return Customer.create(customer_fields(**overrides))
    return _make


@pytest.fixture
def repository():
    return InMemoryCustomerRepository()
