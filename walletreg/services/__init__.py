"""Services Layer — orchestration between the pure core and storage.

Invariants:
    - Services own transactions; stores and core functions never commit
    - Services receive their resources (session factory) by injection

Design Decisions:
    - One service per workflow for locality (ADR: ExMA no god objects)
"""
