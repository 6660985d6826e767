from fastapi import Depends, Header, Request

from storyhub.models.user import User
from storyhub.services import AnnouncementBoard, AuthService, CheckoutStub, ContentStore, MessagingHub


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer xxx`` header value."""
    if authorization and authorization.lower().startswith("bearer "):
        return authorization.split(" ", 1)[1].strip() or None
    return None


def get_auth(request: Request) -> AuthService:
    return request.app.state.auth


def get_content(request: Request) -> ContentStore:
    return request.app.state.content


def get_checkout(request: Request) -> CheckoutStub:
    return request.app.state.checkout


def get_announcements(request: Request) -> AnnouncementBoard:
    return request.app.state.announcements


def get_hub(request: Request) -> MessagingHub:
    return request.app.state.hub


async def get_current_user(
    authorization: str | None = Header(default=None),
    auth: AuthService = Depends(get_auth),
) -> User:
    """
    FastAPI dependency to get the current authenticated user.

    Reads the bearer token from the Authorization header and resolves it
    through the auth service, which raises Unauthorized (401) when the token
    is missing, invalid or expired, or its user no longer exists.

    Usage:
        @router.get("/protected")
        async def protected_route(user: User = Depends(get_current_user)):
            return {"user_id": str(user.id)}
    """
    return await auth.resolve_identity(bearer_token(authorization))
