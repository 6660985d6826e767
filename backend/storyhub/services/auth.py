# storyhub/services/auth.py
"""
Auth service: registration, login and per-request identity resolution.
Built on the password/token codec and the embedded store.
"""
import logging

from starlette.concurrency import run_in_threadpool
from tortoise.exceptions import IntegrityError

from storyhub.core.db import Store, parse_id
from storyhub.core.errors import ConflictError, InvalidCredentials, Unauthorized, ValidationError
from storyhub.core.security import TokenCodec, hash_password, verify_password
from storyhub.models.user import EMAIL_MAX_LENGTH, NAME_MAX_LENGTH, USERNAME_MAX_LENGTH, User

logger = logging.getLogger("uvicorn.error")


def normalize_email(email: str | None) -> str:
    # emails compare case-insensitively: "A@X.io" and "a@x.io" are one account
    return (email or "").strip().lower()


def public_user(user: User) -> dict:
    """Fields of a user that are safe to expose (never the password hash)."""
    return {
        "id": str(user.id),
        "email": user.email,
        "username": user.username,
        "name": user.name,
        "role": user.role,
        "createdAt": user.created_at.isoformat() if user.created_at else None,
    }


class AuthService:
    def __init__(self, store: Store, codec: TokenCodec):
        self.store = store
        self.codec = codec

    async def register(
        self,
        email: str | None,
        password: str | None,
        name: str | None = None,
        username: str | None = None,
    ) -> tuple[str, User]:
        """
        Create a user account and issue its first token.

        Raises:
            ValidationError: email or password missing, or a field over its length limit
            ConflictError: email or username already registered
        """
        email = normalize_email(email)
        if not email or not password:
            raise ValidationError("email/password required")
        username = (username or "").strip() or None
        name = (name or "").strip() or None
        for field, value, limit in (
            ("email", email, EMAIL_MAX_LENGTH),
            ("username", username, USERNAME_MAX_LENGTH),
            ("name", name, NAME_MAX_LENGTH),
        ):
            if value and len(value) > limit:
                raise ValidationError(f"{field} must be at most {limit} characters")

        # Friendly pre-checks; the unique constraints below still decide races
        if await User.filter(email=email).exists():
            raise ConflictError("Email already registered", code="EMAIL_EXISTS")
        if username and await User.filter(username=username).exists():
            raise ConflictError("Username already exists", code="USERNAME_EXISTS")

        password_hash = await run_in_threadpool(hash_password, password)
        try:
            user = await User.create(
                email=email,
                username=username,
                name=name,
                password_hash=password_hash,
                role="user",
            )
        except IntegrityError:
            raise ConflictError("Email or username already exists")

        logger.info("[auth] registered user id=%s", user.id)
        return self.codec.issue(str(user.id), user.role), user

    async def login(self, email: str | None, password: str | None) -> tuple[str, User]:
        """
        Check credentials and issue a token.

        Unknown email and wrong password raise the same InvalidCredentials.
        """
        user = await User.get_or_none(email=normalize_email(email))
        ok = False
        if user and password:
            ok = await run_in_threadpool(verify_password, password, user.password_hash)
        if not ok:
            logger.info("[auth] failed login attempt")
            raise InvalidCredentials()
        return self.codec.issue(str(user.id), user.role), user

    async def resolve_identity(self, token: str | None) -> User:
        """
        Resolve a bearer token to a live user row.

        Raises:
            Unauthorized: token missing (AUTH_REQUIRED), invalid or expired
                (AUTH_INVALID_TOKEN), or its user no longer exists
                (AUTH_USER_NOT_FOUND)
        """
        if not token:
            raise Unauthorized(code="AUTH_REQUIRED")
        claims = self.codec.verify(token)
        if claims is None:
            raise Unauthorized("Invalid or expired token", code="AUTH_INVALID_TOKEN")
        user_id = parse_id(claims.user_id)
        user = await User.get_or_none(id=user_id) if user_id else None
        if not user:
            raise Unauthorized("User not found", code="AUTH_USER_NOT_FOUND")
        return user
