# storyhub/models/__init__.py
"""
Database models module initialization.
Exports all Tortoise ORM models for convenient imports.

Models exported:
- User: Account, credentials and role
- Story: User-authored content item
- Favorite: User <-> story bookmark, unique per pair
- Message: Persisted chat message of a room
- Announcement: Admin-authored notice
"""
from .user import User
from .story import Story, StoryType
from .favorite import Favorite
from .message import Message
from .announcement import Announcement
