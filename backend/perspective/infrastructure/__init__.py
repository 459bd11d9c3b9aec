"""Infrastructure Layer — document store access and cross-cutting concerns.

Invariants:
    - Driver exceptions never escape this layer unwrapped (StorageError)
    - Nothing here assigns ids or timestamps

Design Decisions:
    - Gateway depends on the DocumentCollection protocol, not on pymongo types
"""
