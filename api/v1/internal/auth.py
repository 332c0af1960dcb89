from fastapi import APIRouter, Depends, Request, Response, status

from core.rate_limit import LOGIN_RATE_LIMIT, PASSWORD_RESET_RATE_LIMIT, REGISTER_RATE_LIMIT, limiter
from core.security import get_current_user
from core.settings import settings
from db.models import User
from schemas.auth import (
    ForgotPasswordReq,
    RegisterReq,
    RegisterResp,
    ResetPasswordReq,
    UserLoginReq,
    UserLoginResp,
    VerifyEmailReq,
)
from schemas.common import MessageData, MessageResp
from schemas.user import UserResp
from services.auth_service import AuthService, user_out

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post('/register', response_model=RegisterResp, status_code=status.HTTP_201_CREATED)
@limiter.limit(REGISTER_RATE_LIMIT)
async def register(request: Request, req: RegisterReq) -> RegisterResp:
    return await AuthService.register(req.name, req.email, req.password)


@router.post('/login', response_model=UserLoginResp)
@limiter.limit(LOGIN_RATE_LIMIT)
async def login(request: Request, response: Response, req: UserLoginReq) -> UserLoginResp:
    result = await AuthService.login_user(req.email, req.password)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=result.data.access_token,
        max_age=settings.access_token_expire_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    return result


@router.post('/logout', response_model=MessageResp)
async def logout(response: Response) -> MessageResp:
    response.delete_cookie(settings.session_cookie_name)
    return MessageResp(data=MessageData(message="Signed out"))


@router.get('/me', response_model=UserResp)
async def me(user: User = Depends(get_current_user)) -> UserResp:
    return UserResp(data=user_out(user))


@router.post('/forgot-password', response_model=MessageResp)
@limiter.limit(PASSWORD_RESET_RATE_LIMIT)
async def forgot_password(request: Request, req: ForgotPasswordReq) -> MessageResp:
    return await AuthService.forgot_password(req.email)


@router.post('/reset-password', response_model=MessageResp)
@limiter.limit(PASSWORD_RESET_RATE_LIMIT)
async def reset_password(request: Request, req: ResetPasswordReq) -> MessageResp:
    return await AuthService.reset_password(req.token, req.password)


@router.post('/verify-email', response_model=MessageResp)
async def verify_email(req: VerifyEmailReq) -> MessageResp:
    return await AuthService.verify_email(req.token)
