"""
Subscription Service for applying RevenueCat events to user subscription flags
"""
import logging
import re
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from crud.user import UserRepository
from database_models import User
from models.subscription import EVENT_EFFECTS, SubscriptionEvent, SubscriptionStatus
from services.errors import UserNotFoundError

logger = logging.getLogger(__name__)

# Largest id an integer primary key column can hold
MAX_USER_ID = 2**63 - 1


def extract_user_id(app_user_id: str) -> Optional[int]:
    """
    Derive the local user ID from a RevenueCat app_user_id by dropping every
    non-digit character ("app_12" -> 12).

    Returns:
        The numeric ID, or None if no usable digits remain
    """
    digits = re.sub(r"\D", "", app_user_id or "")
    if not digits:
        return None
    user_id = int(digits)
    if user_id > MAX_USER_ID:
        return None
    return user_id


class SubscriptionService:
    """
    Service for reading and mutating a user's (has_trial, is_subscribed) state.
    """

    def __init__(self, db: AsyncSession, user_repo: UserRepository):
        """
        Initialize the subscription service with database session and user repository.

        Args:
            db: AsyncSession instance for database operations
            user_repo: UserRepository instance for user operations
        """
        self.db = db
        self.user_repo = user_repo

    async def resolve_user(self, app_user_id: str) -> User:
        """
        Find the user a webhook refers to.

        A row whose revenuecat_app_user_id equals the external ID wins;
        otherwise the digits of the external ID are used as the local ID.

        Raises:
            UserNotFoundError: if neither lookup matches
        """
        user = await self.user_repo.get_user_by_app_user_id(app_user_id)
        if user is not None:
            return user

        user_id = extract_user_id(app_user_id)
        if user_id is not None:
            user = await self.user_repo.get_user_by_id(user_id)
        if user is None:
            raise UserNotFoundError(f"No user matches app_user_id {app_user_id!r}")
        return user

    async def apply_event(self, user: User, event: SubscriptionEvent) -> User:
        """
        Apply the flag updates for an event. Writes only when a flag changes.
        """
        updates = {
            field: value
            for field, value in EVENT_EFFECTS[event].items()
            if getattr(user, field) != value
        }
        if not updates:
            logger.info(f"Event {event.value} leaves user {user.id} unchanged")
            return user

        logger.info(f"Event {event.value} updating user {user.id}: {updates}")
        return await self.user_repo.update_user(user, updates)

    async def get_status(self, user_id: int) -> SubscriptionStatus:
        """
        Read the current subscription flags for a user.

        Raises:
            UserNotFoundError: if the user does not exist
        """
        user = await self.user_repo.get_user_by_id(user_id)
        if user is None:
            raise UserNotFoundError(f"User {user_id} not found")
        return SubscriptionStatus(
            user_id=user.id,
            has_trial=user.has_trial,
            is_subscribed=user.is_subscribed,
        )
