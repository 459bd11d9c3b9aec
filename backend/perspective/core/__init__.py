"""Core Layer — pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - merge_user and the error model are pure and deterministic
    - Store and gateway contracts are Protocols implemented by the shell

Design Decisions:
    - Functional core separated from imperative shell
"""
