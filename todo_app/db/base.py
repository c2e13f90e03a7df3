"""
SQLAlchemy declarative base and metadata.
Single place for table definitions; scripts/init_db.py creates them.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass
