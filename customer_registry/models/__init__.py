"""ORM Models — SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - All models imported here so Base.metadata is complete for create_all and Alembic
"""

from customer_registry.models.customer import CustomerRecord  # noqa: F401
