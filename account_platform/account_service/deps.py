"""
FastAPI dependency wiring for the Account Service.
"""
from datetime import timedelta
from functools import lru_cache
from typing import Optional
import logging

import jwt
from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from .config import settings
from .db import get_db
from .models import User
from .repository import SqlAlchemyUserRepository, UserRepository
from .security import PasswordHasher, TokenIssuer
from .services import AuthService, UserService

logger = logging.getLogger(__name__)


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(settings.PASSWORD_SCHEMES)


@lru_cache
def get_token_issuer() -> TokenIssuer:
    """Process-wide token issuer. Raises ConfigurationError without a secret."""
    return TokenIssuer(
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        expires_delta=timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS),
    )


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return SqlAlchemyUserRepository(db)


def get_auth_service(
    users: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(users, hasher, tokens)


def get_user_service(
    users: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserService:
    return UserService(users, hasher)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
    users: UserRepository = Depends(get_user_repository),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> User:
    """Resolve the user named by a valid ``Authorization: Bearer`` token."""
    if not authorization or not authorization.lower().startswith("bearer "):
        raise _unauthorized("Not authenticated")
    token = authorization.split(" ", 1)[1].strip()
    try:
        claims = tokens.decode(token)
        user_id = int(claims["sub"])
    except (jwt.InvalidTokenError, ValueError) as exc:
        logger.info(f"Rejected bearer token: {type(exc).__name__}")
        raise _unauthorized("Invalid token") from exc

    user = users.get_by_id(user_id)
    if user is None:
        raise _unauthorized("User not found")
    return user
