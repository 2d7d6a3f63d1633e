"""
Restaurants API — Application Package Initializer
==================================================

What: Marks the `restaurants_api` directory as a Python package.
Who:  Imported by uvicorn (`restaurants_api.main:app`), Alembic, and pytest.

Architecture Note:
    The backend is split into thin layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (CRUD + login logic)     │  ← Lookups, DTO mapping, errors
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes translate HTTP into service calls, services raise application
    exceptions, and the global handlers in main.py turn those into responses.
"""

__version__ = "1.0.0"
