"""
Password hashing and bearer-token issuance.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, Optional

import jwt
from passlib.context import CryptContext

from .errors import ConfigurationError

DEFAULT_SCHEMES = ("pbkdf2_sha256",)
HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")
DEFAULT_TOKEN_LIFETIME = timedelta(days=7)


class PasswordHasher:
    """
    One-way salted password hashing backed by a passlib CryptContext.

    Hashes are self-describing (scheme, rounds, salt and digest in one string),
    so verification only needs the stored value.
    """

    def __init__(self, schemes: Iterable[str] = DEFAULT_SCHEMES):
        # pbkdf2_sha256 by default to avoid external bcrypt backend issues
        self._context = CryptContext(schemes=list(schemes), deprecated="auto")

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, password_hash: Optional[str]) -> bool:
        """
        Check a plaintext password against a stored hash.

        Returns False for a mismatch and for a missing or malformed hash;
        never raises on untrusted input.
        """
        if not password_hash:
            return False
        try:
            return self._context.verify(password, password_hash)
        except (ValueError, TypeError):
            return False

    def dummy_verify(self) -> None:
        """Spend roughly the time of a real verify without a stored hash."""
        self._context.dummy_verify()


class TokenIssuer:
    """
    Mints signed, time-limited bearer tokens (JWT, HMAC).

    Args:
        secret: Symmetric signing key. Must be non-empty.
        algorithm: One of HS256, HS384, HS512.
        expires_delta: Token lifetime, 7 days by default.

    Raises:
        ConfigurationError: if the secret is missing/blank or the algorithm
            is not an HMAC algorithm.
    """

    def __init__(
        self,
        secret: Optional[str],
        algorithm: str = "HS256",
        expires_delta: timedelta = DEFAULT_TOKEN_LIFETIME,
    ):
        if not secret or not secret.strip():
            raise ConfigurationError("JWT_SECRET must be set to a non-empty value")
        if algorithm not in HMAC_ALGORITHMS:
            raise ConfigurationError(
                f"JWT_ALGORITHM must be one of {', '.join(HMAC_ALGORITHMS)}, got '{algorithm}'"
            )
        if expires_delta <= timedelta(0):
            raise ConfigurationError("Token lifetime must be positive")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_delta = expires_delta

    def issue(self, identity: Any, now: Optional[datetime] = None) -> str:
        """Return a token whose subject is ``identity.id``."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(identity.id),
            "id": identity.id,
            "iat": issued_at,
            "exp": issued_at + self.expires_delta,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def decode(self, token: str) -> Dict[str, Any]:
        """
        Verify signature and expiry of a token minted with the same secret.

        Raises:
            jwt.InvalidTokenError: on any invalid, tampered or expired token.
        """
        return jwt.decode(
            token,
            self._secret,
            algorithms=[self.algorithm],
            options={"require": ["sub", "exp"]},
        )
