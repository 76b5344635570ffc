# server/models/__init__.py

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
