# storyhub/models/message.py
import uuid
from tortoise import fields, models

ROOM_ID_MAX_LENGTH = 128


class Message(models.Model):
    """Append-only chat message. A null sender means the author was anonymous."""
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    room_id = fields.CharField(max_length=ROOM_ID_MAX_LENGTH, index=True)
    sender = fields.ForeignKeyField(
        "models.User", related_name="messages", null=True, on_delete=fields.SET_NULL
    )
    content = fields.TextField()
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "messages"
