import pytest


pytestmark = pytest.mark.asyncio


async def test_admin_posts_announcement(client, create_admin, auth_header_factory):
    admin, password = await create_admin()
    headers = await auth_header_factory(admin.email, password)

    resp = await client.post(
        "/api/v1/admin/announce",
        headers=headers,
        json={"message": "  Maintenance tonight  ", "pinned": True},
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["message"] == "Maintenance tonight"
    assert data["pinned"] is True
    assert data["authorId"] == str(admin.id)


async def test_non_admin_is_forbidden(client, create_user, auth_header_factory):
    user, password = await create_user()
    headers = await auth_header_factory(user.email, password)

    resp = await client.post("/api/v1/admin/announce", headers=headers, json={"message": "hi"})
    assert resp.status_code == 403
    assert resp.json()["error"]["code"] == "FORBIDDEN_ADMIN_ONLY"

    listed = await client.get("/api/v1/announcements")
    assert listed.json()["data"] == []


async def test_announce_requires_auth(client):
    resp = await client.post("/api/v1/admin/announce", json={"message": "hi"})
    assert resp.status_code == 401


async def test_blank_announcement_rejected(client, create_admin, auth_header_factory):
    admin, password = await create_admin()
    headers = await auth_header_factory(admin.email, password)
    resp = await client.post("/api/v1/admin/announce", headers=headers, json={"message": "   "})
    assert resp.status_code == 400


async def test_pinned_announcements_listed_first(client, create_admin, auth_header_factory):
    admin, password = await create_admin()
    headers = await auth_header_factory(admin.email, password)
    for message, pinned in [("plain one", False), ("pinned", True), ("plain two", False)]:
        resp = await client.post(
            "/api/v1/admin/announce", headers=headers, json={"message": message, "pinned": pinned}
        )
        assert resp.status_code == 200

    listed = (await client.get("/api/v1/announcements")).json()["data"]
    assert len(listed) == 3
    assert listed[0]["message"] == "pinned"
    assert all(a["pinned"] is False for a in listed[1:])


async def test_room_history_endpoint(app, client):
    hub = app.state.hub
    conn = hub.connect()
    hub.join(conn, "lobby")
    await hub.publish(conn, "lobby", "first")
    await hub.publish(conn, "lobby", "second")

    resp = await client.get("/api/v1/rooms/lobby/messages")
    assert resp.status_code == 200
    assert [m["content"] for m in resp.json()["data"]] == ["first", "second"]

    empty = await client.get("/api/v1/rooms/nobody-here/messages")
    assert empty.json()["data"] == []
