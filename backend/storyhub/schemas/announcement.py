# storyhub/schemas/announcement.py
from pydantic import BaseModel

__all__ = ["AnnouncementIn"]


class AnnouncementIn(BaseModel):
    message: str | None = None
    pinned: bool = False
