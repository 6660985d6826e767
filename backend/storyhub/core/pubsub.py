# storyhub/core/pubsub.py
"""
PubSub module for realtime room broadcasting.
Keeps per-process room membership and fans events out to connection outboxes.
Nothing here is persisted: a restart drops every membership.
"""
import asyncio
import uuid
from typing import Dict, Set


class Connection:
    """
    One realtime client.

    The transport (websocket route) owns the socket and drains ``outbox`` into
    it, so events reach the client in the order they were enqueued.
    """

    def __init__(self, user_id: str | None = None):
        self.id = uuid.uuid4().hex
        self.user_id = user_id  # bound from the handshake token, None if anonymous
        self.rooms: Set[str] = set()
        self.outbox: asyncio.Queue = asyncio.Queue()

    def send(self, payload: dict) -> None:
        self.outbox.put_nowait(payload)

    def __repr__(self) -> str:
        return f"<Connection {self.id} user={self.user_id}>"


class Channel:
    """
    Room registry.

    Data structure:
    - _rooms: Dict[room_id, Set[Connection]]

    Rooms are created by the first join and removed when their last member
    leaves.
    """

    def __init__(self):
        self._rooms: Dict[str, Set[Connection]] = {}

    def join(self, room_id: str, conn: Connection) -> None:
        self._rooms.setdefault(room_id, set()).add(conn)
        conn.rooms.add(room_id)

    def leave_all(self, conn: Connection) -> None:
        for room_id in list(conn.rooms):
            members = self._rooms.get(room_id)
            if members is not None:
                members.discard(conn)
                if not members:
                    del self._rooms[room_id]
        conn.rooms.clear()

    def members(self, room_id: str) -> Set[Connection]:
        return set(self._rooms.get(room_id, set()))

    def rooms(self) -> list[str]:
        return sorted(self._rooms)

    def broadcast(self, room_id: str, payload: dict) -> int:
        """
        Enqueue ``payload`` for every current member of ``room_id``.
        Runs without awaiting, so no other event can interleave with the loop.
        Returns the number of recipients.
        """
        conns = list(self._rooms.get(room_id, ()))
        for conn in conns:
            conn.send(payload)
        return len(conns)
