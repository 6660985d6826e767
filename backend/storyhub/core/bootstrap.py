# storyhub/core/bootstrap.py
"""
Bootstrap module for application initialization.
Creates the default admin account on first startup.
"""
import logging

from starlette.concurrency import run_in_threadpool

from storyhub.config import Settings
from storyhub.core.security import hash_password
from storyhub.models.user import User

logger = logging.getLogger("uvicorn.error")


async def ensure_default_admin(settings: Settings) -> User | None:
    """
    If no admin exists in the database, create one from settings.
    Only takes effect under the following conditions:
      - Currently no user with role="admin"
      - And ADMIN_PASSWORD is set (to avoid using a default weak password)
    Settings used:
      admin_email    (ADMIN_EMAIL, default: "admin@local")
      admin_username (ADMIN_USERNAME, default: "admin")
      admin_password (ADMIN_PASSWORD, required, otherwise won't create)
    """
    if await User.filter(role="admin").exists():
        return None

    if not settings.admin_password:
        logger.warning("[bootstrap] No admin present, but ADMIN_PASSWORD not set -> skip creating default admin.")
        return None

    admin_email = settings.admin_email.strip().lower()
    if await User.filter(email=admin_email).exists():
        logger.warning("[bootstrap] ADMIN_EMAIL %s belongs to a regular user -> skip creating default admin.", admin_email)
        return None

    # If username is already taken by a regular account, pick a non-conflicting name
    admin_username = base_username = settings.admin_username
    suffix = 1
    while await User.filter(username=admin_username).exists():
        suffix += 1
        admin_username = f"{base_username}{suffix}"

    u = await User.create(
        email=admin_email,
        username=admin_username,
        name="Admin",
        password_hash=await run_in_threadpool(hash_password, settings.admin_password),
        role="admin",
    )
    logger.warning("[bootstrap] Created default admin -> username=%s email=%s id=%s",
                   u.username, u.email, u.id)
    return u
