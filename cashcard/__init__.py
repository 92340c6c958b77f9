"""
Cash Card Service — Application Package Initializer
=====================================================

What: Marks the `cashcard` directory as a Python package.
Why:  Enables module imports like `from cashcard.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The service follows a layered architecture:

    ┌─────────────────────────────────────┐
    │        Routes (API Layer)           │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │        Security (Auth Layer)        │  ← HTTP Basic + role check
    ├─────────────────────────────────────┤
    │     Services (Business Logic)       │  ← Owner-scoped card operations
    ├─────────────────────────────────────┤
    │     Models & Schemas (Data)         │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │     Database (Persistence)          │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch SQL; services never see HTTP. Authentication resolves
    the caller once per request and hands the owner name down explicitly.
"""

__version__ = "1.0.0"
