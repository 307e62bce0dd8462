"""
Notepad Backend — Application Package Initializer
==================================================

What: Marks the `notepad` directory as a Python package.
Why:  Enables module imports like `from notepad.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend is layered the same way top to bottom:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Services (Business Rules)      │  ← update/toggle semantics
    ├─────────────────────────────────────┤
    │         Store (Persistence)         │  ← CRUD + predicate scans
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Sessions)          │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch SQL; the store never knows about HTTP.
"""

__version__ = "1.0.0"
