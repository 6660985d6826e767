# storyhub/core/security.py
"""
Security module for authentication.
Handles password hashing and signing/verification of stateless session tokens.
"""
import datetime as dt
from dataclasses import dataclass

import jwt  # PyJWT
from passlib.context import CryptContext

# Password hashing context
# Argon2 is a modern, salted, memory-hard password hashing algorithm
pwd_context = CryptContext(
    schemes=["argon2"],  # Use Argon2 for password hashing
    deprecated="auto",   # Automatically handle deprecated schemes
)

ROLES = ("user", "admin")


def hash_password(plain: str) -> str:
    """
    Hash a plain text password using Argon2.

    Args:
        plain: Plain text password to hash

    Returns:
        Hashed password string (salt included, safe to store in database)
    """
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """
    Verify a plain text password against a stored hash.

    Returns False on mismatch and on a malformed or unknown hash; never raises
    for bad input.
    """
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        return False


@dataclass(frozen=True)
class TokenClaims:
    """Verified contents of a session token."""

    user_id: str
    role: str
    expires_at: dt.datetime


class TokenCodec:
    """
    Signs and verifies compact session tokens (JWT, HMAC SHA-256).

    The token carries the subject id and role, so callers can make RBAC
    decisions without a session table. Verification depends only on the token
    and the secret given at construction.
    """

    def __init__(self, secret: str, expire_minutes: int = 720, algorithm: str = "HS256"):
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret
        self.expire_minutes = expire_minutes
        self.algorithm = algorithm

    def issue(self, user_id: str, role: str) -> str:
        """
        Create a signed token for a user.

        Token payload includes:
            - sub: Subject (user ID)
            - role: User role for authorization
            - iat: Issued at timestamp
            - exp: Expiration timestamp
        """
        now = dt.datetime.now(dt.timezone.utc)
        payload = {
            "sub": str(user_id),
            "role": role,
            "iat": now,
            "exp": now + dt.timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str | None) -> TokenClaims | None:
        """
        Validate signature and expiry.

        Returns None for a missing, malformed, tampered, foreign-signed or
        expired token, and for payloads without a subject or a known role.
        """
        if not token:
            return None
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.InvalidTokenError:
            return None

        role = payload.get("role")
        if role not in ROLES:
            return None
        expires_at = dt.datetime.fromtimestamp(payload["exp"], tz=dt.timezone.utc)
        return TokenClaims(user_id=payload["sub"], role=role, expires_at=expires_at)
