"""
Account services: authentication and user management.

Both services take their collaborators in the constructor and hold no
per-request state beyond the repository they were built with.
"""
from typing import Optional
import logging

from .models import User
from .repository import UserRepository
from .schemas import AuthResponse, UserRead
from .security import PasswordHasher, TokenIssuer

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, users: UserRepository, hasher: PasswordHasher, tokens: TokenIssuer):
        self.users = users
        self.hasher = hasher
        self.tokens = tokens

    def authenticate(self, username: str, password: str) -> Optional[AuthResponse]:
        """
        Verify a username/password pair and issue a bearer token.

        Returns None when the username is unknown or the password is wrong;
        callers cannot tell the two apart.
        """
        user = self.users.get_by_username(username)
        if user is None:
            # Keep the unknown-user path doing comparable hashing work
            self.hasher.dummy_verify()
            logger.warning(f"Login failed: username={username}")
            return None

        if not self.hasher.verify(password, user.password_hash):
            logger.warning(f"Login failed: username={username}")
            return None

        token = self.tokens.issue(user)
        logger.info(f"Login succeeded: user_id={user.id}, username={user.username}")
        return AuthResponse(user=UserRead.model_validate(user), token=token)


class UserService:
    def __init__(self, users: UserRepository, hasher: PasswordHasher):
        self.users = users
        self.hasher = hasher

    def get(self, user_id: int) -> Optional[User]:
        return self.users.get_by_id(user_id)

    def create(self, username: str, password: str) -> User:
        """
        Register a new user with a hashed password.

        Raises:
            DuplicateUsernameError: if the username is already taken
        """
        user = User(username=username, password_hash=self.hasher.hash(password))
        user = self.users.add(user)
        logger.info(f"User created: user_id={user.id}, username={user.username}")
        return user
