"""Services Layer — customer use cases (create, get, update, delete).

Invariants:
    - Use cases depend only on core/ (entity, OperationResult, CustomerRepository)
    - Every public method returns an OperationResult; nothing raises past it

Design Decisions:
    - One file per use case for locality
"""
