"""Services Layer — business rules orchestrating the persistence gateway.

Invariants:
    - Services receive their gateway and logger through the constructor
    - Existence is enforced here and nowhere else
"""
