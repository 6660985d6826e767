# storyhub/models/story.py
"""
Database model for stories (user-authored content items).
"""
import uuid
from enum import Enum
from tortoise import fields, models

TITLE_MAX_LENGTH = 200


class StoryType(str, Enum):
    FREE = "free"          # free to read
    DONATION = "donation"  # free, donations welcome
    SALE = "sale"          # priced; the only type carrying a price


class Story(models.Model):
    """
    Story database model.

    Owned by its author; deleting the author cascades. ``price`` is set if and
    only if ``type`` is ``sale``.
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    author = fields.ForeignKeyField("models.User", related_name="stories", on_delete=fields.CASCADE)
    title = fields.CharField(max_length=TITLE_MAX_LENGTH)
    excerpt = fields.TextField(default="")
    body = fields.TextField()
    tags = fields.JSONField(default=list)  # ordered, de-duplicated list of strings
    type = fields.CharEnumField(StoryType, max_length=16, default=StoryType.FREE)
    price = fields.DecimalField(max_digits=10, decimal_places=2, null=True)
    likes = fields.IntField(default=0)  # read-only, no operation changes it
    created_at = fields.DatetimeField(auto_now_add=True, index=True)

    class Meta:
        table = "stories"
