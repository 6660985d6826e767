"""
Unit tests for core.pubsub module.
Tests room membership and fan-out to connection outboxes.
"""
from storyhub.core.pubsub import Channel, Connection


def drain(conn: Connection) -> list[dict]:
    items = []
    while not conn.outbox.empty():
        items.append(conn.outbox.get_nowait())
    return items


class TestChannelMembership:
    """Tests for join and leave."""

    def test_join_creates_room_on_first_join(self):
        channel = Channel()
        conn = Connection()
        assert channel.rooms() == []

        channel.join("lobby", conn)

        assert channel.rooms() == ["lobby"]
        assert conn in channel.members("lobby")
        assert conn.rooms == {"lobby"}

    def test_join_is_idempotent(self):
        channel = Channel()
        conn = Connection()
        channel.join("lobby", conn)
        channel.join("lobby", conn)
        assert len(channel.members("lobby")) == 1

    def test_connection_can_be_in_several_rooms(self):
        channel = Channel()
        conn = Connection()
        channel.join("a", conn)
        channel.join("b", conn)
        assert conn in channel.members("a")
        assert conn in channel.members("b")

    def test_leave_all_removes_from_every_room_and_drops_empty_rooms(self):
        channel = Channel()
        conn = Connection()
        other = Connection()
        channel.join("a", conn)
        channel.join("b", conn)
        channel.join("b", other)

        channel.leave_all(conn)

        assert conn.rooms == set()
        assert channel.rooms() == ["b"]
        assert channel.members("b") == {other}

    def test_leave_all_without_rooms_does_not_error(self):
        Channel().leave_all(Connection())

    def test_members_returns_a_copy(self):
        channel = Channel()
        conn = Connection()
        channel.join("a", conn)
        channel.members("a").clear()
        assert conn in channel.members("a")


class TestChannelBroadcast:
    """Tests for message fan-out."""

    def test_broadcast_reaches_all_members(self):
        channel = Channel()
        c1, c2 = Connection(), Connection()
        channel.join("room", c1)
        channel.join("room", c2)

        sent = channel.broadcast("room", {"type": "message", "content": "hi"})

        assert sent == 2
        assert drain(c1) == [{"type": "message", "content": "hi"}]
        assert drain(c2) == [{"type": "message", "content": "hi"}]

    def test_broadcast_only_reaches_that_room(self):
        channel = Channel()
        inside, outside = Connection(), Connection()
        channel.join("room-1", inside)
        channel.join("room-2", outside)

        channel.broadcast("room-1", {"n": 1})

        assert drain(inside) == [{"n": 1}]
        assert drain(outside) == []

    def test_broadcast_to_unknown_room_is_a_no_op(self):
        assert Channel().broadcast("nobody-here", {"n": 1}) == 0

    def test_broadcast_preserves_order(self):
        channel = Channel()
        conn = Connection()
        channel.join("room", conn)
        for i in range(5):
            channel.broadcast("room", {"n": i})
        assert [p["n"] for p in drain(conn)] == [0, 1, 2, 3, 4]

    def test_connections_have_unique_ids(self):
        assert Connection().id != Connection().id
