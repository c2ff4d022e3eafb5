"""
Webhook Service - authenticates and dispatches RevenueCat webhook notifications
"""

import json
import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from auth_utils import verify_bearer_header
from crud.user import UserRepository
from models.subscription import SubscriptionEvent, parse_webhook_payload
from services.errors import InvalidPayloadError, UnauthorizedError
from services.subscription_service import SubscriptionService

logger = logging.getLogger(__name__)


class WebhookService:
    """
    Handles one RevenueCat webhook delivery.
    The shared secret is passed in at construction rather than read from globals.
    """

    def __init__(self, db: AsyncSession, webhook_secret: Optional[str]):
        """
        Args:
            db: AsyncSession instance for database operations
            webhook_secret: Secret RevenueCat sends as the bearer credential
        """
        self.db = db
        self.webhook_secret = webhook_secret
        self.subscriptions = SubscriptionService(db, UserRepository(db))

    def authenticate(self, authorization: Optional[str]) -> None:
        """
        Verify the Authorization header.

        Raises:
            UnauthorizedError: if the header is missing, malformed or wrong,
                or no secret is configured
        """
        if not self.webhook_secret:
            logger.error("REVENUECAT_WEBHOOK_SECRET is not set. Rejecting webhook.")
            raise UnauthorizedError()

        if not verify_bearer_header(authorization, self.webhook_secret):
            reason = "missing" if not authorization else "invalid"
            logger.warning(f"RevenueCat webhook rejected: {reason} authorization header")
            raise UnauthorizedError()

    async def handle(self, authorization: Optional[str], body: bytes) -> dict:
        """
        Authenticate, validate and apply a webhook notification.
        The body is only decoded once the caller is authenticated.

        Args:
            authorization: Raw Authorization header value
            body: Raw request body

        Returns:
            {"status": "ok"} on success, including for unknown event types

        Raises:
            UnauthorizedError, InvalidPayloadError, UserNotFoundError
        """
        self.authenticate(authorization)

        try:
            payload = json.loads(body)
        except (ValueError, RecursionError):
            logger.warning("RevenueCat webhook body is not valid JSON")
            raise InvalidPayloadError()

        logger.info(f"RevenueCat webhook received: {payload}")

        webhook_event = parse_webhook_payload(payload)
        if webhook_event is None:
            raise InvalidPayloadError()

        user = await self.subscriptions.resolve_user(webhook_event.app_user_id)

        event = webhook_event.event
        if event is SubscriptionEvent.UNKNOWN:
            logger.warning(
                f"Unhandled RevenueCat event type {webhook_event.event_type!r} for user {user.id}"
            )

        await self.subscriptions.apply_event(user, event)
        return {"status": "ok"}
