"""
RecipeShare Backend - Application Package Initializer
=====================================================

What: Marks the `recipeshare` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP verbs, envelopes, status codes
    ├─────────────────────────────────────┤
    │      Services (Query Executors)     │  ← One parameterized statement per call
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy tables + Pydantic bodies
    ├─────────────────────────────────────┤
    │   Database (Connection Provider)    │  ← Pooled async sessions
    └─────────────────────────────────────┘

    Each layer depends only on the one below it, so services are tested against
    a real (SQLite) database without HTTP, and routes are tested through the
    ASGI app with the database handle injected.
"""

__version__ = "1.0.0"
