# storyhub/services/announcements.py
from storyhub.core.db import Store
from storyhub.core.errors import Forbidden, ValidationError
from storyhub.models.announcement import Announcement
from storyhub.models.user import User


def announcement_to_dict(a: Announcement) -> dict:
    return {
        "id": str(a.id),
        "authorId": str(a.author_id),
        "message": a.message,
        "pinned": a.pinned,
        "createdAt": a.created_at.isoformat() if a.created_at else None,
    }


class AnnouncementBoard:
    """Admin-authored notices; pinned ones first, newest first within each group."""

    def __init__(self, store: Store):
        self.store = store

    async def post(self, author: User, message: str | None, pinned: bool = False) -> Announcement:
        if author.role != "admin":
            raise Forbidden("Admin only", code="FORBIDDEN_ADMIN_ONLY")
        message = (message or "").strip()
        if not message:
            raise ValidationError("message required")
        return await Announcement.create(author=author, message=message, pinned=bool(pinned))

    async def list(self) -> list[Announcement]:
        return await Announcement.all().order_by("-pinned", "-created_at")
