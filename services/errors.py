"""
Error taxonomy for the webhook and subscription endpoints.
Each error carries the HTTP status and error code the routers respond with.
"""


class SubscriptionServiceError(Exception):
    status_code = 500
    error_code = "server_error"
    default_message = "Internal Server Error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthorizedError(SubscriptionServiceError):
    status_code = 401
    error_code = "unauthorized"
    default_message = "Invalid or missing authorization"


class InvalidPayloadError(SubscriptionServiceError):
    status_code = 400
    error_code = "invalid_payload"
    default_message = "Payload must include non-empty 'event' and 'app_user_id'"


class UserNotFoundError(SubscriptionServiceError):
    status_code = 404
    error_code = "user_not_found"
    default_message = "User not found"


class ServerError(SubscriptionServiceError):
    pass
