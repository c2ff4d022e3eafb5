from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.utils.responses import error_response
from crud.user import UserRepository
from database import get_db
from services.errors import UserNotFoundError
from services.subscription_service import SubscriptionService

subscription_router = APIRouter(prefix="/subscription", tags=["subscription"])


@subscription_router.get("/check/{user_id}")
async def check_subscription(user_id: int, db: AsyncSession = Depends(get_db)):
    """
    Return the trial and subscription flags for a user.
    Shape: { "user_id": int, "has_trial": bool, "is_subscribed": bool }
    """
    service = SubscriptionService(db, UserRepository(db))
    try:
        status = await service.get_status(user_id)
    except UserNotFoundError as e:
        return error_response(e.error_code, status=e.status_code, message=e.message)

    return status.model_dump()
