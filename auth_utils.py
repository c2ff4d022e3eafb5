"""
Authentication utilities: bearer token parsing and shared-secret verification
"""

import hmac
from typing import Optional

BEARER_PREFIX = "bearer"


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Return the credential from an "Authorization: Bearer <token>" header value.
    Returns None if the header is missing or not a bearer credential.
    """
    if not authorization:
        return None

    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != BEARER_PREFIX:
        return None

    token = token.strip()
    return token or None


def verify_shared_secret(supplied: Optional[str], secret: Optional[str]) -> bool:
    """
    Compare a supplied credential against the configured secret in constant time.
    An unset secret never verifies.
    """
    if not supplied or not secret:
        return False
    return hmac.compare_digest(supplied.encode("utf-8"), secret.encode("utf-8"))


def verify_bearer_header(authorization: Optional[str], secret: Optional[str]) -> bool:
    """Check an Authorization header value against the configured secret"""
    return verify_shared_secret(extract_bearer_token(authorization), secret)
