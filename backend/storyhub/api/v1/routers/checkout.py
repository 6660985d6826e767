# storyhub/api/v1/routers/checkout.py
from fastapi import APIRouter, Depends

from storyhub.api.v1.deps import get_checkout, get_current_user
from storyhub.models.user import User
from storyhub.schemas.story import CheckoutIn
from storyhub.services import CheckoutStub

router = APIRouter(tags=["checkout"])


@router.post("/checkout")
async def checkout(
    body: CheckoutIn,
    user: User = Depends(get_current_user),
    stub: CheckoutStub = Depends(get_checkout),
):
    """
    Simulated checkout for a priced story. No payment is processed.

    Error codes:
        - NOT_FOUND (404): Story does not exist
        - NOT_FOR_SALE (400): Story has no price
    """
    descriptor = await stub.checkout(body.storyId)
    return {"success": True, "data": {"checkout": descriptor}}
