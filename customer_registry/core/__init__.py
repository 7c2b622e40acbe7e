"""Core Layer — customer entity, outcome contract, query types and storage port.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - Entity construction and query evaluation are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: use cases in services/
      orchestrate async port calls around the pure logic
"""
