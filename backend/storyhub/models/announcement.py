# storyhub/models/announcement.py
import uuid
from tortoise import fields, models


class Announcement(models.Model):
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    author = fields.ForeignKeyField("models.User", related_name="announcements", on_delete=fields.CASCADE)
    message = fields.TextField()
    pinned = fields.BooleanField(default=False)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "announcements"
