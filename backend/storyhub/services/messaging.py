# storyhub/services/messaging.py
"""
Messaging hub: realtime publish/subscribe over named rooms.

Every published message is written to the store before it is fanned out, so
persisted history and what members received can never diverge. If the write
fails nothing is broadcast and only the publisher learns about it.
"""
import logging

from tortoise.exceptions import BaseORMException

from storyhub.core.db import Store, parse_id
from storyhub.core.errors import Forbidden, InternalError, ValidationError
from storyhub.core.pubsub import Channel, Connection
from storyhub.models.message import ROOM_ID_MAX_LENGTH, Message

logger = logging.getLogger("uvicorn.error")

ANONYMOUS = "anon"


def message_to_event(m: Message) -> dict:
    return {
        "type": "message",
        "id": str(m.id),
        "roomId": m.room_id,
        "senderId": str(m.sender_id) if m.sender_id else ANONYMOUS,
        "content": m.content,
        "createdAt": m.created_at.isoformat() if m.created_at else None,
    }


class MessagingHub:
    def __init__(self, store: Store, channel: Channel | None = None, default_room: str = "public"):
        self.store = store
        self.channel = channel or Channel()
        self.default_room = default_room

    def _room(self, room_id: str | None) -> str:
        if room_id is not None and not isinstance(room_id, str):
            raise ValidationError("roomId must be a string")
        room = (room_id or "").strip() or self.default_room
        if len(room) > ROOM_ID_MAX_LENGTH:
            raise ValidationError(f"roomId must be at most {ROOM_ID_MAX_LENGTH} characters")
        return room

    def connect(self, user_id: str | None = None) -> Connection:
        """A fresh connection starts with no room membership."""
        return Connection(user_id=user_id)

    def join(self, conn: Connection, room_id: str | None) -> str:
        """
        Add ``conn`` to a room, creating the room on first join. Idempotent.
        The room id must be a string of at most ROOM_ID_MAX_LENGTH characters.
        """
        room = self._room(room_id)
        self.channel.join(room, conn)
        logger.debug("[hub] %r joined %s", conn, room)
        return room

    def disconnect(self, conn: Connection) -> None:
        self.channel.leave_all(conn)

    async def publish(
        self,
        conn: Connection,
        room_id: str | None,
        content: str | None,
        sender_id: str | None = None,
    ) -> dict:
        """
        Persist a message, then deliver it to the room's current members.

        Raises:
            ValidationError: blank or non-string content, or an invalid room id
            Forbidden: connection has not joined the room (ROOM_NOT_JOINED), or
                claims a sender other than its bound user
            InternalError: the message could not be stored; nothing was sent
        """
        room = self._room(room_id)
        if content is not None and not isinstance(content, str):
            raise ValidationError("content must be a string")
        if not (content or "").strip():
            raise ValidationError("content required")
        if room not in conn.rooms:
            raise Forbidden(f"Join room '{room}' before publishing", code="ROOM_NOT_JOINED")
        if sender_id and sender_id != (conn.user_id or ANONYMOUS):
            raise Forbidden("Sender does not match the connection identity")

        try:
            message = await Message.create(room_id=room, sender_id=parse_id(conn.user_id), content=content)
        except BaseORMException:
            logger.exception("[hub] failed to persist message for room %s", room)
            raise InternalError()

        event = message_to_event(message)
        self.channel.broadcast(room, event)
        return event

    async def history(self, room_id: str | None, limit: int = 50) -> list[dict]:
        """Most recent persisted messages of a room, oldest first."""
        rows = await Message.filter(room_id=self._room(room_id)).order_by("-created_at").limit(limit)
        return [message_to_event(m) for m in reversed(rows)]
