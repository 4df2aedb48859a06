"""
Infrastructure layer for the All About Blinds job costing service.

This layer contains the implementation details behind the domain ports:
- Job storage (in-memory, seeded from JSON)
- Company profile storage (JSON file)
- PDF rendering (Jinja2 + WeasyPrint)
- HTTP API (FastAPI)

The infrastructure layer implements interfaces defined in the domain layer,
following the Dependency Inversion Principle of Clean Architecture.
"""
