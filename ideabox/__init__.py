"""
Idea Box API: Application Package Initializer
=============================================

What: Marks the `ideabox` directory as a Python package.
Who:  Imported by uvicorn, Alembic, pytest and the `ideabox` console script.

Architecture Note:
    The service follows the same layered shape throughout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← existence checks, mapping
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Boxes own ideas. Every idea operation is scoped under its parent box.
"""

__version__ = "1.0.0"
