"""Domain layer for the ORM test doubles.

This layer contains:
- Interfaces: the scheduler port the doubles defer callbacks through
- Value Objects: immutable option structures and callback outcomes
- Exceptions: errors raised by test helpers (never by the doubles)

The domain layer has no dependencies beyond the standard library and
voluptuous, which normalizes loosely shaped option mappings.
"""
