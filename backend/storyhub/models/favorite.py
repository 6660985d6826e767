# storyhub/models/favorite.py
import uuid
from tortoise import fields, models


class Favorite(models.Model):
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    user = fields.ForeignKeyField("models.User", related_name="favorites", on_delete=fields.CASCADE)
    story = fields.ForeignKeyField("models.Story", related_name="favorites", on_delete=fields.CASCADE)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "favorites"
        unique_together = (("user", "story"),)
