# storyhub/api/v1/routers/auth.py
from fastapi import APIRouter, Depends

from storyhub.api.v1.deps import get_auth, get_current_user
from storyhub.models.user import User
from storyhub.schemas.auth import LoginIn, RegisterIn
from storyhub.services import AuthService, public_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register")
async def register(body: RegisterIn, auth: AuthService = Depends(get_auth)):
    """
    Register a new user account and log it in.

    Email is required and unique (case-insensitive); username is optional and
    unique when given. The password is hashed before storage.

    Returns:
        dict: success envelope with ``token`` and the public ``user``

    Error codes:
        - BAD_REQUEST (400): Missing email or password
        - EMAIL_EXISTS / USERNAME_EXISTS (409): Already taken
    """
    token, user = await auth.register(body.email, body.password, name=body.name, username=body.username)
    return {"success": True, "data": {"token": token, "user": public_user(user)}}


@router.post("/login")
async def login(body: LoginIn, auth: AuthService = Depends(get_auth)):
    """
    Authenticate by email and password.

    Error codes:
        - AUTH_INVALID_CREDENTIALS (401): Unknown email or wrong password
          (deliberately indistinguishable)
    """
    token, user = await auth.login(body.email, body.password)
    return {"success": True, "data": {"token": token, "user": public_user(user)}}


@router.get("/me")
async def me(user: User = Depends(get_current_user)):
    """Public fields of the user behind the bearer token."""
    return {"success": True, "data": public_user(user)}
