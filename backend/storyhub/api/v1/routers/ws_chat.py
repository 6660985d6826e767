import asyncio
import json
import logging

from fastapi import APIRouter, Query, WebSocket
from starlette.websockets import WebSocketDisconnect

from storyhub.api.v1.deps import bearer_token
from storyhub.core.errors import AppError, Unauthorized, ValidationError
from storyhub.core.pubsub import Connection
from storyhub.services import AuthService, MessagingHub

router = APIRouter()
logger = logging.getLogger("uvicorn.error")

WS_UNAUTHORIZED = 4401


async def _pump(ws: WebSocket, conn: Connection) -> None:
    # Writer side: the outbox is this connection's only path to the socket.
    try:
        while True:
            payload = await conn.outbox.get()
            await ws.send_text(json.dumps(payload))
    except (WebSocketDisconnect, RuntimeError):
        return


async def _handle_event(hub: MessagingHub, conn: Connection, raw: str) -> None:
    try:
        msg = json.loads(raw)
    except json.JSONDecodeError:
        raise ValidationError("invalid JSON")
    if not isinstance(msg, dict):
        raise ValidationError("event must be a JSON object")

    kind = msg.get("type")
    if kind == "join":
        room = hub.join(conn, msg.get("roomId"))
        conn.send({"type": "joined", "roomId": room})
    elif kind == "publish":
        await hub.publish(conn, msg.get("roomId"), msg.get("content"), sender_id=msg.get("senderId"))
    else:
        raise ValidationError(f"unknown event type: {kind}")


@router.websocket("/ws/chat")
async def ws_chat(ws: WebSocket, token: str | None = Query(default=None)):
    """
    Realtime chat over named rooms.

    Message flow:
    1. Client connects, optionally with ``?token=...`` or a bearer header;
       a present but invalid token closes the handshake with code 4401
    2. Server sends: {"type": "ready", "connectionId": "...", "userId": "..."|null}
    3. Client sends: {"type": "join", "roomId": "..."} -> {"type": "joined", "roomId": "..."}
    4. Client sends: {"type": "publish", "roomId": "...", "content": "..."}
    5. Server persists the message and sends {"type": "message", ...} to the
       room's current members

    Errors go only to the connection that caused them as
    {"type": "error", "code": "...", "message": "..."}.
    """
    hub: MessagingHub = ws.app.state.hub
    auth: AuthService = ws.app.state.auth

    token = token or bearer_token(ws.headers.get("authorization"))
    user_id = None
    if token:
        try:
            user = await auth.resolve_identity(token)
        except Unauthorized as e:
            logger.info("[ws_chat] rejected handshake: %s", e.code)
            await ws.close(code=WS_UNAUTHORIZED)
            return
        user_id = str(user.id)

    await ws.accept()
    conn = hub.connect(user_id)
    writer = asyncio.create_task(_pump(ws, conn))
    logger.info("[ws_chat] connected %r", conn)
    conn.send({"type": "ready", "connectionId": conn.id, "userId": user_id})
    try:
        while True:
            raw = await ws.receive_text()
            try:
                await _handle_event(hub, conn, raw)
            except AppError as e:
                conn.send({"type": "error", **e.to_dict()})
    except WebSocketDisconnect:
        pass
    finally:
        hub.disconnect(conn)
        writer.cancel()
        try:
            await writer
        except asyncio.CancelledError:
            pass
        logger.info("[ws_chat] disconnected %r", conn)
