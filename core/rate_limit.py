"""
Rate limiting for the CNEBL API.

Uses slowapi to enforce request limits:
- Public endpoints: 100 requests/minute
- Login: 5 attempts per 15 minutes
- Registration and password reset: 3 per hour
- Team chat posting: 30 messages/minute
"""

from fastapi import Request, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from core.errors import ErrorCode, error_response
from core.settings import settings
from core.security import verify_access_token


def get_rate_limit_key(request: Request) -> str:
    """
    Get rate limit key - uses the signed-in user if present, otherwise IP address.
    """
    token = None
    auth = request.headers.get("Authorization", "")
    if auth.lower().startswith("bearer "):
        token = auth[7:]
    else:
        token = request.cookies.get(settings.session_cookie_name)

    if token:
        payload = verify_access_token(token)
        if payload and payload.get("sub"):
            return f"user:{payload['sub']}"
    return get_remote_address(request)


# Create limiter with custom key function
limiter = Limiter(key_func=get_rate_limit_key, enabled=settings.rate_limit_enabled)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """Custom handler for rate limit exceeded errors."""
    return error_response(
        429,
        ErrorCode.RATE_LIMITED,
        f"Too many requests. Please try again later. ({exc.detail})",
    )


# Rate limit constants for easy reference
PUBLIC_RATE_LIMIT = "100/minute"
LOGIN_RATE_LIMIT = "5 per 15 minutes"
REGISTER_RATE_LIMIT = "3/hour"
PASSWORD_RESET_RATE_LIMIT = "3/hour"
MESSAGE_RATE_LIMIT = "30/minute"
