# storyhub/api/v1/routers/stories.py
from fastapi import APIRouter, Depends, Query

from storyhub.api.v1.deps import get_content, get_current_user
from storyhub.models.user import User
from storyhub.schemas.story import StoryCreateIn
from storyhub.services import ContentStore, story_to_dict

router = APIRouter(prefix="/stories", tags=["stories"])


@router.post("")
async def create_story(
    body: StoryCreateIn,
    user: User = Depends(get_current_user),
    content: ContentStore = Depends(get_content),
):
    """
    Publish a story authored by the current user.

    Error codes:
        - BAD_REQUEST (400): Blank title/body, unknown type, sale without price
        - AUTH_* (401): Not authenticated
    """
    story = await content.create(
        user,
        title=body.title,
        body=body.body,
        excerpt=body.excerpt,
        tags=body.tags,
        type=body.type,
        price=body.price,
    )
    return {"success": True, "data": story_to_dict(story)}


@router.get("")
async def list_stories(
    q: str | None = Query(default=None, description="Case-insensitive search in title/excerpt/body"),
    offset: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=200),
    content: ContentStore = Depends(get_content),
):
    """
    List stories newest first, optionally filtered by ``q``.
    An empty result is a normal response.
    """
    rows, total = await content.list(q, offset=offset, limit=limit)
    items = [story_to_dict(s) for s in rows]
    return {"success": True, "data": {"items": items, "offset": offset, "limit": limit, "total": total}}


@router.get("/{story_id}")
async def get_story(story_id: str, content: ContentStore = Depends(get_content)):
    story = await content.get(story_id)
    return {"success": True, "data": story_to_dict(story)}


@router.delete("/{story_id}")
async def delete_story(
    story_id: str,
    user: User = Depends(get_current_user),
    content: ContentStore = Depends(get_content),
):
    """
    Delete a story (author or admin only).

    Error codes:
        - NOT_FOUND (404): Story does not exist
        - FORBIDDEN (403): Caller is neither the author nor an admin
    """
    await content.delete(story_id, user)
    return {"success": True, "data": {"id": story_id, "deleted": True}}


@router.post("/{story_id}/favorite")
async def toggle_favorite(
    story_id: str,
    user: User = Depends(get_current_user),
    content: ContentStore = Depends(get_content),
):
    """Add the story to the caller's favorites, or remove it if already there."""
    action = await content.toggle_favorite(user, story_id)
    return {"success": True, "data": {"action": action}}
