"""
RevenueCat Router - webhook endpoint for subscription lifecycle events
"""

import logging
from fastapi import APIRouter, Request, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.utils.responses import error_response, status_ok_response
from config.settings import Settings, get_settings
from database import get_db
from services.errors import SubscriptionServiceError
from services.webhook_service import WebhookService

logger = logging.getLogger(__name__)

revenuecat_router = APIRouter(prefix="/revenuecat", tags=["revenuecat"])


def get_webhook_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> WebhookService:
    return WebhookService(db, webhook_secret=settings.revenuecat_webhook_secret)


@revenuecat_router.api_route("/webhook", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
async def revenuecat_webhook(
    request: Request,
    service: WebhookService = Depends(get_webhook_service),
):
    """
    Handle RevenueCat webhook events authenticated by a shared bearer secret.

    RevenueCat retries deliveries that get a non-2xx answer, so unknown event
    types are acknowledged with 200 while auth, payload and lookup failures
    return 401, 400 and 404.

    Args:
        request: FastAPI Request object (for headers and raw body)
        service: WebhookService built with the configured secret

    Returns:
        {"status": "ok"} with 200, or the error envelope
    """
    try:
        await service.handle(request.headers.get("authorization"), await request.body())
    except SubscriptionServiceError as e:
        if e.status_code >= 500:
            logger.error(f"RevenueCat webhook failed: {e.message}")
        return error_response(e.error_code, status=e.status_code, message=e.message)

    return status_ok_response()
