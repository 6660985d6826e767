# storyhub/services/checkout.py
"""
Simulated checkout. Produces a payment descriptor for priced stories without
touching store state or any payment provider.
"""
import secrets

from storyhub.core.errors import NotForSale
from storyhub.services.stories import ContentStore


class CheckoutStub:
    def __init__(self, content: ContentStore, base_url: str):
        self.content = content
        self.base_url = base_url.rstrip("/")

    async def checkout(self, story_id) -> dict:
        """
        Raises:
            NotFound: story does not exist
            NotForSale: story has no price
        """
        story = await self.content.get(story_id)
        if story.price is None:
            raise NotForSale()
        reference = secrets.token_urlsafe(12)
        return {
            "url": f"{self.base_url}/{reference}",
            "reference": reference,
            "amount": float(story.price),
            "storyId": str(story.id),
        }
