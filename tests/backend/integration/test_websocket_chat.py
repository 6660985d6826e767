"""
Websocket chat tests. These drive the full app through Starlette's TestClient,
which runs the lifespan and talks to /ws/chat synchronously.
"""
import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from storyhub.config import Settings
from storyhub.main import create_app


@pytest.fixture
def client():
    cfg = Settings(database_url="sqlite://:memory:", jwt_secret="ws-secret", admin_password=None)
    with TestClient(create_app(cfg)) as c:
        yield c


def _register(client, email: str) -> tuple[str, str]:
    resp = client.post("/api/v1/auth/register", json={"email": email, "password": "p1"})
    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    return data["token"], data["user"]["id"]


def test_ready_event_for_anonymous_connection(client):
    with client.websocket_connect("/ws/chat") as ws:
        ready = ws.receive_json()
        assert ready["type"] == "ready"
        assert ready["userId"] is None
        assert ready["connectionId"]


def test_ready_event_carries_user(client):
    token, user_id = _register(client, "ws@example.com")
    with client.websocket_connect(f"/ws/chat?token={token}") as ws:
        assert ws.receive_json()["userId"] == user_id


def test_invalid_token_closes_handshake(client):
    with pytest.raises(WebSocketDisconnect) as exc:
        with client.websocket_connect("/ws/chat?token=garbage") as ws:
            ws.receive_json()
    assert exc.value.code == 4401


def test_publish_reaches_joined_members(client):
    token, user_id = _register(client, "talker@example.com")
    with client.websocket_connect(f"/ws/chat?token={token}") as alice, \
            client.websocket_connect("/ws/chat") as bob, \
            client.websocket_connect("/ws/chat") as carol:
        for ws in (alice, bob, carol):
            ws.receive_json()

        alice.send_json({"type": "join", "roomId": "lobby"})
        assert alice.receive_json() == {"type": "joined", "roomId": "lobby"}
        bob.send_json({"type": "join", "roomId": "lobby"})
        assert bob.receive_json() == {"type": "joined", "roomId": "lobby"}

        alice.send_json({"type": "publish", "roomId": "lobby", "content": "hello"})
        for ws in (alice, bob):
            event = ws.receive_json()
            assert event["type"] == "message"
            assert event["content"] == "hello"
            assert event["senderId"] == user_id

        # carol never joined, so the next thing she sees is her own error
        carol.send_json({"type": "bogus"})
        error = carol.receive_json()
        assert error["type"] == "error"
        assert error["code"] == "BAD_REQUEST"

    history = client.get("/api/v1/rooms/lobby/messages").json()["data"]
    assert [m["content"] for m in history] == ["hello"]


def test_publish_without_join_is_an_error(client):
    with client.websocket_connect("/ws/chat") as ws:
        ws.receive_json()
        ws.send_json({"type": "publish", "roomId": "lobby", "content": "early"})
        error = ws.receive_json()
        assert error["type"] == "error"
        assert error["code"] == "ROOM_NOT_JOINED"


def test_join_without_room_uses_default(client):
    with client.websocket_connect("/ws/chat") as ws:
        ws.receive_json()
        ws.send_json({"type": "join"})
        assert ws.receive_json() == {"type": "joined", "roomId": "public"}
        ws.send_json({"type": "publish", "content": "hi all"})
        event = ws.receive_json()
        assert event["roomId"] == "public"
        assert event["senderId"] == "anon"


def test_invalid_json_keeps_connection_open(client):
    with client.websocket_connect("/ws/chat") as ws:
        ws.receive_json()
        ws.send_text("not json")
        assert ws.receive_json()["code"] == "BAD_REQUEST"
        ws.send_json({"type": "join", "roomId": "r"})
        assert ws.receive_json()["type"] == "joined"


def test_non_string_content_keeps_connection_usable(client):
    with client.websocket_connect("/ws/chat") as ws:
        ws.receive_json()
        ws.send_json({"type": "join", "roomId": "r"})
        assert ws.receive_json()["type"] == "joined"

        ws.send_json({"type": "publish", "roomId": "r", "content": 123})
        error = ws.receive_json()
        assert error["type"] == "error"
        assert error["code"] == "BAD_REQUEST"

        ws.send_json({"type": "publish", "roomId": "r", "content": "still here"})
        event = ws.receive_json()
        assert event["type"] == "message"
        assert event["content"] == "still here"


@pytest.mark.parametrize("room_id", [7, "r" * 129])
def test_invalid_room_id_is_an_error_event(client, room_id):
    with client.websocket_connect("/ws/chat") as ws:
        ws.receive_json()
        ws.send_json({"type": "join", "roomId": room_id})
        error = ws.receive_json()
        assert error["type"] == "error"
        assert error["code"] == "BAD_REQUEST"

        ws.send_json({"type": "join", "roomId": "ok"})
        assert ws.receive_json() == {"type": "joined", "roomId": "ok"}
