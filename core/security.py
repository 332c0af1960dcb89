import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import bcrypt
import resend
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from core.errors import ForbiddenError, UnauthorizedError
from core.logging import get_logger
from core.settings import settings
from db.models import User
from utils.constants import ADMIN_ROLES, ROLE_COMMISSIONER

log = get_logger("security")

resend.api_key = settings.resend_api_key

bearer_scheme = HTTPBearer(auto_error=False)

# ---------------------- Session Tokens ---------------------- #

def token_expiry() -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=settings.access_token_expire_days)


# Create access token for a user
def create_access_token(user: User, expires_at: Optional[datetime] = None) -> str:
    to_encode = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role,
        "exp": expires_at or token_expiry(),
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


# Verify the access token
def verify_access_token(token: str) -> Optional[dict]:
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        log.info("jwt_verification_failed", error=str(e))
        return None


def extract_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    """Bearer header wins; the session cookie is the browser fallback."""
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.session_cookie_name)


async def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[User]:
    token = extract_token(request, credentials)
    if not token:
        return None

    payload = verify_access_token(token)
    if payload is None:
        return None

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        return None

    user = User.get_or_none(User.id == user_id)
    if user is None or not user.is_active:
        return None
    return user


# Get the data for the user
async def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise UnauthorizedError("Authentication required")
    return user


def require_role(*roles: str, message: str = "Access denied") -> Callable:
    """
    Create a dependency that requires one of the given roles.

    Usage:
        @router.post("/games")
        async def create_game(user: User = Depends(require_role("admin", "commissioner"))):
            ...
    """

    async def checker(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise ForbiddenError(message)
        return user

    return checker


require_admin = require_role(*ADMIN_ROLES, message="Admin access required")
require_commissioner = require_role(ROLE_COMMISSIONER, message="Commissioner access required")


# --------------------- One-time Tokens --------------------- #

def generate_token() -> str:
    return secrets.token_hex(32)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


# --------------------- Encryption/Validation --------------------- #

def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def check_password(password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode('utf-8'), hashed_password.encode('utf-8'))
    except ValueError:
        return False


# ---------------------------- Email ---------------------------- #

def send_email(to_email: str, subject: str, html: str) -> dict:
    if settings.development_mode:
        log.info("email_skipped_development_mode", to=to_email, subject=subject)
        return {"success": True}

    if not resend.api_key:
        log.error("email_not_configured", to=to_email)
        return {"success": False, "error": "Email service not configured"}

    try:
        params: resend.Emails.SendParams = {
            "from": settings.email_from,
            "to": [to_email],
            "subject": subject,
            "html": html,
        }
        response = resend.Emails.send(params)
        return {"success": True, "email_id": response.get("id") if isinstance(response, dict) else getattr(response, "id", None)}
    except Exception as e:
        log.error("email_send_failed", to=to_email, error=str(e))
        return {"success": False, "error": str(e)}


def send_verification_email(to_email: str, token: str) -> dict:
    url = f"{settings.app_url}/verify-email?token={token}"
    log.info("verification_email", to=to_email, url=url if settings.development_mode else None)
    return send_email(
        to_email,
        "Verify your CNEBL account",
        f"<p>Welcome to the CNEBL! Confirm your email address:</p><p><a href=\"{url}\">{url}</a></p>"
        f"<p>This link expires in {settings.email_verification_expire_hours} hours.</p>",
    )


def send_password_reset_email(to_email: str, token: str) -> dict:
    url = f"{settings.app_url}/reset-password?token={token}"
    log.info("password_reset_email", to=to_email, url=url if settings.development_mode else None)
    return send_email(
        to_email,
        "Reset your CNEBL password",
        f"<p>Someone asked to reset the password for this account.</p><p><a href=\"{url}\">{url}</a></p>"
        f"<p>This link expires in {settings.password_reset_expire_minutes} minutes. "
        f"If you did not ask for this, ignore this email.</p>",
    )
