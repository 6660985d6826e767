# storyhub/schemas/story.py
"""
Pydantic schemas for story and checkout endpoints.
"""
from typing import List, Optional
from pydantic import BaseModel, Field

__all__ = ["StoryCreateIn", "CheckoutIn"]


class StoryCreateIn(BaseModel):
    """
    Request model for publishing a story.
    ``price`` is only kept when ``type`` is "sale".
    """
    title: Optional[str] = None
    excerpt: Optional[str] = ""
    body: Optional[str] = None
    tags: List[str] = []
    type: Optional[str] = None  # "free" (default), "donation" or "sale"
    price: Optional[float] = Field(default=None, allow_inf_nan=False)


class CheckoutIn(BaseModel):
    storyId: Optional[str] = None
