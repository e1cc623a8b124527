"""
FlyBook Backend: Application Package
=====================================

What: Travel catalog API (flights, packages, destinations, hotels).
Who:  Imported by uvicorn (flybook.main:app), Alembic, the seeder CLI and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← filter building, lookups, writes
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← lazily connected async engine
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
