# storyhub/api/v1/routers/announcements.py
from fastapi import APIRouter, Depends

from storyhub.api.v1.deps import get_announcements, get_current_user
from storyhub.models.user import User
from storyhub.schemas.announcement import AnnouncementIn
from storyhub.services import AnnouncementBoard, announcement_to_dict

router = APIRouter(tags=["announcements"])


@router.post("/admin/announce")
async def post_announcement(
    body: AnnouncementIn,
    user: User = Depends(get_current_user),
    board: AnnouncementBoard = Depends(get_announcements),
):
    """
    Publish a notice (admin only).

    Error codes:
        - FORBIDDEN_ADMIN_ONLY (403): Caller is not an admin
        - BAD_REQUEST (400): Blank message
    """
    a = await board.post(user, body.message, pinned=body.pinned)
    return {"success": True, "data": announcement_to_dict(a)}


@router.get("/announcements")
async def list_announcements(board: AnnouncementBoard = Depends(get_announcements)):
    """Pinned notices first, newest first within each group."""
    rows = await board.list()
    return {"success": True, "data": [announcement_to_dict(a) for a in rows]}
