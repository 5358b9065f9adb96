# File: app/models/base.py

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Both tables (users, posts) inherit from this so init_db can create them
    from one metadata object.
    """
    pass
