"""
Product Catalog Backend: Application Package Initializer
========================================================

What: Marks the `app` directory as a Python package.
Who:  Imported by uvicorn (`app.main:app`), pytest, and `python -m app`.

Architecture Note:
    The backend is split into thin layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← request parsing, status codes
    ├─────────────────────────────────────┤
    │   Services (Record Store, Assets)   │  ← SQL statements, file writes
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch the session directly; they receive a ProductStore
    through FastAPI's dependency injection and an AssetService from app state.
"""

__version__ = "1.0.0"
