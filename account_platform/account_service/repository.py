"""
Credential store: persistence of user records.
"""
from typing import Optional, Protocol
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .errors import DuplicateUsernameError
from .models import User

logger = logging.getLogger(__name__)

# Largest value a 64-bit signed INTEGER column can hold
MAX_USER_ID = 2**63 - 1


class UserRepository(Protocol):
    """Protocol for user storage - allows swappable implementations."""

    def get_by_id(self, user_id: int) -> Optional[User]:
        ...

    def get_by_username(self, username: str) -> Optional[User]:
        ...

    def add(self, user: User) -> User:
        """Persist a new user, assign its id and return it.

        Raises:
            DuplicateUsernameError: if the username is already taken
        """
        ...


class SqlAlchemyUserRepository:
    """UserRepository backed by a request-scoped SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: int) -> Optional[User]:
        # Ids the column cannot hold cannot exist; the driver would overflow
        if not 1 <= user_id <= MAX_USER_ID:
            return None
        return self.db.get(User, user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def add(self, user: User) -> User:
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            # The unique constraint on username is the only one a new row can hit
            self.db.rollback()
            logger.info(f"Rejected duplicate username: {user.username}")
            raise DuplicateUsernameError(user.username) from e
        self.db.refresh(user)
        return user
