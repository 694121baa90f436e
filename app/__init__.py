"""
Tours API: REST service for managing tour resources.

Application package root. A small modular monolith using hexagonal
architecture (ports & adapters).

Bounded contexts:
    - tours: Create, read, update, delete, and filter tours.

Layers:
    - domain: Entities, domain errors, repository ports. No framework imports.
    - application: Use cases orchestrating the domain through ports.
    - infrastructure: SQLAlchemy adapters implementing the ports.
    - interfaces: FastAPI routers and Pydantic schemas.
    - shared: Error pipeline, security middleware, logging.
"""
