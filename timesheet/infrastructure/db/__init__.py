"""
Database infrastructure: engine, sessions and table models.
"""

from .database import Base, SessionLocal, engine, get_db, create_all_tables

__all__ = [
    "Base",
    "SessionLocal",
    "engine",
    "get_db",
    "create_all_tables",
]
