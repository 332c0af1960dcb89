from datetime import timedelta

from core.errors import BadRequestError, ConflictError, UnauthorizedError, ValidationFailedError
from core.logging import get_logger
from core.security import (
    check_password,
    create_access_token,
    generate_token,
    hash_password,
    hash_token,
    send_password_reset_email,
    send_verification_email,
    token_expiry,
)
from core.settings import settings
from db.base import db
from db.models import EmailVerificationToken, PasswordResetToken, User
from schemas.auth import AuthData, RegisterData, RegisteredUser, RegisterResp, UserLoginResp
from schemas.common import MessageData, MessageResp
from schemas.user import UserOut
from utils.constants import ROLE_PLAYER
from utils.dates import utcnow
from utils.sanitize import sanitize_email, sanitize_name

log = get_logger("auth")

FORGOT_PASSWORD_MESSAGE = "If an account exists with this email, you will receive a password reset link shortly."


def user_out(user: User) -> UserOut:
    return UserOut.model_validate(user)


class AuthService:

    @staticmethod
    async def register(name: str, email: str, password: str) -> RegisterResp:
        clean_email = sanitize_email(email)
        if not clean_email:
            raise ValidationFailedError({"email": ["Invalid email address format"]})
        clean_name = sanitize_name(name)

        if User.get_by_email(clean_email):
            raise ConflictError("An account with this email already exists")

        with db.atomic():
            user = User.create(
                email=clean_email,
                password_hash=hash_password(password),
                full_name=clean_name,
                role=ROLE_PLAYER,
            )
            token = AuthService.issue_verification_token(user)

        send_verification_email(user.email, token)
        log.info("user_registered", user_id=user.id)

        return RegisterResp(
            data=RegisterData(
                message="Registration successful. Please check your email to verify your account.",
                user=RegisteredUser(id=user.id, name=user.full_name, email=user.email),
            )
        )

    @staticmethod
    async def login_user(email: str, password: str) -> UserLoginResp:
        user = User.get_by_email(email)

        if not user or not user.is_active or not check_password(password, user.password_hash):
            log.info("login_failed", email_known=user is not None)
            raise UnauthorizedError("Invalid email or password")

        user.last_login_at = utcnow()
        user.save()

        expires_at = token_expiry()
        access_token = create_access_token(user, expires_at)
        log.info("login_succeeded", user_id=user.id)

        return UserLoginResp(
            data=AuthData(
                access_token=access_token,
                expires_at=expires_at.isoformat(),
                user=user_out(user),
            )
        )

    @staticmethod
    async def forgot_password(email: str) -> MessageResp:
        clean_email = sanitize_email(email)
        user = User.get_by_email(clean_email) if clean_email else None

        if user and user.is_active:
            with db.atomic():
                PasswordResetToken.invalidate_for_user(user.id)
                token = generate_token()
                PasswordResetToken.create(
                    user=user,
                    token_hash=hash_token(token),
                    expires_at=utcnow() + timedelta(minutes=settings.password_reset_expire_minutes),
                )
            send_password_reset_email(user.email, token)
            log.info("password_reset_requested", user_id=user.id)
        else:
            log.info("password_reset_unknown_email")

        # Identical response whether or not the account exists
        return MessageResp(data=MessageData(message=FORGOT_PASSWORD_MESSAGE))

    @staticmethod
    async def reset_password(token: str, password: str) -> MessageResp:
        record = PasswordResetToken.find_valid(hash_token(token))
        if record is None:
            raise BadRequestError("Invalid or expired reset token")

        with db.atomic():
            user = record.user
            user.password_hash = hash_password(password)
            user.save()
            record.used_at = utcnow()
            record.save()
            PasswordResetToken.invalidate_for_user(user.id)

        log.info("password_reset_completed", user_id=user.id)
        return MessageResp(data=MessageData(message="Your password has been reset. You can now sign in."))

    @staticmethod
    async def verify_email(token: str) -> MessageResp:
        record = EmailVerificationToken.find_valid(hash_token(token))
        if record is None:
            raise BadRequestError("Invalid or expired verification token")

        with db.atomic():
            user = record.user
            user.email_verified = True
            user.email_verified_at = utcnow()
            user.save()
            record.used_at = utcnow()
            record.save()

        log.info("email_verified", user_id=user.id)
        return MessageResp(data=MessageData(message="Email verified successfully"))

    @staticmethod
    def issue_verification_token(user: User) -> str:
        EmailVerificationToken.invalidate_for_user(user.id)
        token = generate_token()
        EmailVerificationToken.create(
            user=user,
            token_hash=hash_token(token),
            expires_at=utcnow() + timedelta(hours=settings.email_verification_expire_hours),
        )
        return token

    @staticmethod
    def purge_expired_tokens() -> int:
        removed = PasswordResetToken.purge_stale() + EmailVerificationToken.purge_stale()
        log.info("expired_tokens_purged", count=removed)
        return removed
