"""
Database session access for the API.

Re-exports the unified core.db layer so routers depend on one module:
    from ..database import get_db

Note: Database initialization is handled explicitly in main.py startup,
NOT at import time.
"""

from core.db import db, get_db

__all__ = ["db", "get_db"]
