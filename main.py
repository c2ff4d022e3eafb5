"""
RevenueCat subscription webhook receiver
Authenticates provider callbacks and keeps each user's trial/subscription flags current
"""

import logging
import traceback

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware

from routers.revenuecat_router import revenuecat_router
from routers.subscription_router import subscription_router
from backend.utils.responses import error_response, status_ok_response
from database import init_db
from config.settings import settings
from services.errors import ServerError

# ============================================================================
# LOGGING
# ============================================================================

# Write all events to <LOG_DIR>/app.log and stderr
LOGS_DIR = settings.log_dir
LOGS_DIR.mkdir(parents=True, exist_ok=True)
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(LOGS_DIR / "app.log"),
        logging.StreamHandler()
    ]
)
logger = logging.getLogger(__name__)

# ============================================================================
# FASTAPI APP SETUP
# ============================================================================

app = FastAPI(title="Subscription Webhook Service")


# Uncaught exception middleware - logs all unhandled exceptions and returns 500
class UncaughtExceptionMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(f"Uncaught exception: {e}\n{traceback.format_exc()}")
            error = ServerError()
            return error_response(error.error_code, status=error.status_code, message=error.message)


# Security headers middleware
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add X-Content-Type-Options and X-Frame-Options to all responses"""
    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        return response


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(UncaughtExceptionMiddleware)

# ============================================================================
# STARTUP CHECKS
# ============================================================================
@app.on_event("startup")
async def check_webhook_secret_on_startup():
    """Warn when the webhook secret is missing (every webhook will be rejected)"""
    if not settings.revenuecat_webhook_secret:
        logger.warning("Startup check: REVENUECAT_WEBHOOK_SECRET is not set; webhooks will return 401")
    else:
        logger.info("Startup check: RevenueCat webhook secret loaded")


# Initialize database on startup
@app.on_event("startup")
async def initialize_database():
    """Create the users table if it does not exist."""
    try:
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise


@app.get("/health")
async def health():
    return status_ok_response()


# ============================================================================
# INCLUDE ROUTERS
# ============================================================================
app.include_router(revenuecat_router)
app.include_router(subscription_router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
