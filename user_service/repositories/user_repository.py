"""
Data access for ``User`` rows.

Every method issues exactly one persistence operation against the
session it was built with.  Nothing is validated here: store errors
(unique violations, missing rows on update/delete) propagate to the
caller unchanged once the session has been rolled back.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Persistence operations for users"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, name: str, email: str) -> User:
        user = User(name=name, email=email)
        try:
            self.db.add(user)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user)
        logger.debug(f"Inserted user {user.id}")
        return user

    def find_all(self) -> List[User]:
        return self.db.query(User).order_by(User.id).all()

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def update(self, user_id: int, data: Dict[str, Any]) -> User:
        """
        Apply ``data`` to the user and commit.

        Raises:
            sqlalchemy.orm.exc.NoResultFound: if no user has ``user_id``
        """
        try:
            user = self.db.query(User).filter(User.id == user_id).one()
            for field, value in data.items():
                setattr(user, field, value)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user)
        logger.debug(f"Updated user {user_id}: {sorted(data)}")
        return user

    def delete(self, user_id: int) -> User:
        """
        Delete the user row and return the removed instance (now detached).

        Raises:
            sqlalchemy.orm.exc.NoResultFound: if no user has ``user_id``
        """
        try:
            user = self.db.query(User).filter(User.id == user_id).one()
            self.db.delete(user)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.debug(f"Deleted user {user_id}")
        return user
