"""
Services Module

Domain services built on the embedded store:
- AuthService: registration, login, identity resolution
- ContentStore: stories, search and favorites
- AnnouncementBoard: admin notices
- CheckoutStub: simulated payment descriptors
- MessagingHub: realtime rooms with persisted messages
"""

from .auth import AuthService, public_user
from .stories import ContentStore, story_to_dict
from .announcements import AnnouncementBoard, announcement_to_dict
from .checkout import CheckoutStub
from .messaging import MessagingHub, message_to_event

__all__ = [
    "AuthService",
    "public_user",
    "ContentStore",
    "story_to_dict",
    "AnnouncementBoard",
    "announcement_to_dict",
    "CheckoutStub",
    "MessagingHub",
    "message_to_event",
]
