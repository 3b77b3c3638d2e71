"""
Database models package
"""
from app.models.database import Base, get_db, init_db, close_db, ping_db
from app.models.location import LocationReport

__all__ = [
    "Base",
    "get_db",
    "init_db",
    "close_db",
    "ping_db",
    "LocationReport",
]
