# storyhub/services/stories.py
"""
Content store: create, list/search, get and delete stories, plus favorite
toggling. Ownership is enforced here, not in the routers.
"""
import logging
from decimal import Decimal, InvalidOperation

from tortoise.exceptions import IntegrityError
from tortoise.expressions import Q

from storyhub.core.db import Store, parse_id
from storyhub.core.errors import ConflictError, Forbidden, NotFound, ValidationError
from storyhub.models.favorite import Favorite
from storyhub.models.story import TITLE_MAX_LENGTH, Story, StoryType
from storyhub.models.user import User

logger = logging.getLogger("uvicorn.error")

CENT = Decimal("0.01")
MAX_PRICE = Decimal("99999999.99")  # DECIMAL(10, 2)


def normalize_tags(tags) -> list[str]:
    """Trim tags, drop blanks and keep the first occurrence of duplicates."""
    seen: list[str] = []
    for tag in tags or []:
        tag = str(tag).strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


def story_to_dict(story: Story) -> dict:
    return {
        "id": str(story.id),
        "authorId": str(story.author_id),
        "title": story.title,
        "excerpt": story.excerpt,
        "body": story.body,
        "tags": list(story.tags or []),
        "type": StoryType(story.type).value,
        "price": float(story.price) if story.price is not None else None,
        "likes": story.likes,
        "createdAt": story.created_at.isoformat() if story.created_at else None,
    }


def _normalize_price(story_type: StoryType, price) -> Decimal | None:
    # Only stories on sale carry a price; any price sent with another type is dropped.
    if story_type is not StoryType.SALE:
        return None
    if price is None:
        raise ValidationError("price is required for stories on sale")
    try:
        amount = Decimal(str(price)).quantize(CENT)
    except (InvalidOperation, ValueError):
        raise ValidationError("price must be a number")
    if not amount.is_finite() or amount <= 0:
        raise ValidationError("price must be positive")
    if amount > MAX_PRICE:
        raise ValidationError(f"price must be at most {MAX_PRICE}")
    return amount


class ContentStore:
    def __init__(self, store: Store):
        self.store = store

    async def create(
        self,
        author: User,
        title: str | None,
        body: str | None,
        excerpt: str | None = "",
        tags: list[str] | None = None,
        type: str | None = None,
        price=None,
    ) -> Story:
        """
        Publish a story owned by ``author``.

        Raises:
            ValidationError: blank or over-long title, blank body, unknown
                type, or a sale story without a finite positive price
        """
        title = (title or "").strip()
        if not title or not (body or "").strip():
            raise ValidationError("title/body required")
        if len(title) > TITLE_MAX_LENGTH:
            raise ValidationError(f"title must be at most {TITLE_MAX_LENGTH} characters")
        try:
            story_type = StoryType(type or StoryType.FREE)
        except ValueError:
            raise ValidationError(f"unknown story type: {type}")

        return await Story.create(
            author=author,
            title=title,
            excerpt=(excerpt or "").strip(),
            body=body,
            tags=normalize_tags(tags),
            type=story_type,
            price=_normalize_price(story_type, price),
        )

    async def list(self, query: str | None = None, offset: int = 0, limit: int = 100) -> tuple[list[Story], int]:
        """
        Stories newest first.

        A non-blank ``query`` keeps stories whose title, excerpt or body
        contains it, compared case-insensitively.
        """
        qs = Story.all().order_by("-created_at")
        query = (query or "").strip()
        if query:
            qs = qs.filter(Q(title__icontains=query) | Q(excerpt__icontains=query) | Q(body__icontains=query))
        total = await qs.count()
        rows = await qs.offset(offset).limit(limit)
        return rows, total

    async def get(self, story_id) -> Story:
        sid = parse_id(story_id)
        story = await Story.get_or_none(id=sid) if sid else None
        if not story:
            raise NotFound("Story not found")
        return story

    async def delete(self, story_id, requester: User) -> None:
        """
        Remove a story and its favorites.

        Raises:
            NotFound: story does not exist
            Forbidden: requester is neither the author nor an admin
        """
        story = await self.get(story_id)
        is_author = str(story.author_id) == str(requester.id)
        if not is_author and requester.role != "admin":
            raise Forbidden("Only the author or an admin can delete this story")

        async with self.store.transaction():
            await Favorite.filter(story_id=story.id).delete()
            await Story.filter(id=story.id).delete()
        if not is_author:
            logger.info("[stories] admin %s deleted story %s", requester.id, story.id)

    async def toggle_favorite(self, user: User, story_id) -> str:
        """
        Flip the (user, story) favorite: returns "removed" if it existed,
        "added" otherwise. Read and write happen in one transaction.
        """
        sid = parse_id(story_id)
        try:
            async with self.store.transaction():
                if not sid or not await Story.filter(id=sid).exists():
                    raise NotFound("Story not found")
                existing = await Favorite.get_or_none(user_id=user.id, story_id=sid)
                if existing:
                    await Favorite.filter(id=existing.id).delete()
                    return "removed"
                await Favorite.create(user_id=user.id, story_id=sid)
                return "added"
        except IntegrityError:
            # another toggle for the same pair committed first
            raise ConflictError("Favorite changed concurrently, retry", code="FAVORITE_CONFLICT")
