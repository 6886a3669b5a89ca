"""Infrastructure Layer — database access, storage adapters, and observability.

Invariants:
    - Infrastructure implements core Protocols; core never imports infrastructure
    - Driver exceptions are described (StorageFailure) or mapped, never returned raw

Design Decisions:
    - Thin adapters over SQLAlchemy (ADR: ExMA single responsibility)
"""
