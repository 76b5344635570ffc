# server/models/user.py

from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, Index, String
from . import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# -------------------------------
# User Model
# -------------------------------

class User(Base):
    """
    Database model for blog users.
    Stores the server-generated identifier, the username and the bcrypt hash.
    Rows are soft-deleted by setting `deleted_at`; only live rows count
    towards username uniqueness.
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    username = Column(String(150), nullable=False)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    __table_args__ = (
        Index(
            "uq_users_username_live",
            "username",
            unique=True,
            sqlite_where=deleted_at.is_(None),
            postgresql_where=deleted_at.is_(None),
        ),
    )
