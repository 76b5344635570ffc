# server/core/repository.py

import logging
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import ConflictError, StorageError
from models.user import User, utcnow


logger = logging.getLogger(__name__)


class UserRepository:
    """
    Persistence for User rows.
    Lookups only ever see live rows; soft-deleted users are invisible.
    """

    def __init__(self, db: Session):
        self.db = db

    def _live(self):
        return self.db.query(User).filter(User.deleted_at.is_(None))

    def create(self, user: User) -> User:
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError(detail=str(e.orig)) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(detail=str(e)) from e
        return user

    def find_by_username(self, username: str) -> User | None:
        try:
            return self._live().filter(User.username == username).first()
        except SQLAlchemyError as e:
            raise StorageError(detail=str(e)) from e

    def get_by_id(self, user_id: str) -> User | None:
        try:
            return self._live().filter(User.id == user_id).first()
        except SQLAlchemyError as e:
            raise StorageError(detail=str(e)) from e

    def list_all(self) -> list[User]:
        try:
            return self._live().order_by(User.created_at, User.username).all()
        except SQLAlchemyError as e:
            raise StorageError(detail=str(e)) from e

    def soft_delete(self, user_id: str) -> bool:
        """Marks a live user as deleted. Returns False if there was none."""
        try:
            user = self._live().filter(User.id == user_id).first()
            if user is None:
                return False
            now = utcnow()
            user.deleted_at = now
            user.updated_at = now
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(detail=str(e)) from e
        logger.info("user soft-deleted: user_id=%s", user_id)
        return True
