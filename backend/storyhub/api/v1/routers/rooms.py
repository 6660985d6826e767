# storyhub/api/v1/routers/rooms.py
from fastapi import APIRouter, Depends, Query

from storyhub.api.v1.deps import get_hub
from storyhub.services import MessagingHub

router = APIRouter(prefix="/rooms", tags=["rooms"])


@router.get("/{room_id}/messages")
async def room_history(
    room_id: str,
    limit: int = Query(50, ge=1, le=200),
    hub: MessagingHub = Depends(get_hub),
):
    """
    Persisted messages of a room, oldest first.
    Joining a room over the websocket does not replay history; clients call this instead.
    """
    return {"success": True, "data": await hub.history(room_id, limit=limit)}
