"""Infrastructure Layer — storage adapters, database sessions, logging setup.

Invariants:
    - Adapters implement core.repository_protocols.CustomerRepository exactly
    - Every storage failure leaves this layer as StorageError

Design Decisions:
    - One adapter per backend (memory, SQL); the use cases never know which one runs
"""
