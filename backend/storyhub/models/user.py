# storyhub/models/user.py
"""
Database model for users.
Represents an account with login credentials, profile fields and role.
"""
import uuid
from tortoise import fields, models

EMAIL_MAX_LENGTH = 256
USERNAME_MAX_LENGTH = 64
NAME_MAX_LENGTH = 128


class User(models.Model):
    """
    User database model.

    Relationships:
    - Has many Stories (via related_name="stories")
    - Has many Favorites, Messages and Announcements

    Security:
    - Password is stored as a hash (never store plain text passwords)
    - Email is unique and stored lowercased; username is unique when present
    - Role is "user" or "admin"; there is no promotion path, admins are seeded
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    email = fields.CharField(max_length=EMAIL_MAX_LENGTH, unique=True, index=True)
    username = fields.CharField(max_length=USERNAME_MAX_LENGTH, unique=True, null=True)
    name = fields.CharField(max_length=NAME_MAX_LENGTH, null=True)
    password_hash = fields.CharField(max_length=255)
    role = fields.CharField(max_length=16, default="user")
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "users"
