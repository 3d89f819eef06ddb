"""Infrastructure layer for the ORM test doubles.

The infrastructure layer contains implementations of domain interfaces:
- Schedulers (asyncio event loop, manually drained queue)
- Decorators for logging callback failures

This layer depends on the domain layer and the standard library asyncio
event loop, but the domain layer does NOT depend on infrastructure.
"""
