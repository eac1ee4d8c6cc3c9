"""
AudioCraft Backend: Application Package
=======================================

What: Account, credit and checkout API for the AudioCraft enhancement product.
Who:  Imported by uvicorn (`audiocraft.main:app`), pytest, and the
      `python -m audiocraft` runner.

Architecture Note:
    The backend follows the same layering everywhere:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← auth, entitlement, stubs
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Account record + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← AccountStore interface
    └─────────────────────────────────────┘

    Routes translate HTTP into service calls, services raise the exceptions
    from `audiocraft.exceptions`, and main.py turns those into responses.
"""

__version__ = "1.0.0"
