import re
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from .common import BaseRequest, BaseResponse, CamelModel
from .user import UserOut

_PASSWORD_RULES = (
    (re.compile(r".{10,}", re.S), "Password must be at least 10 characters"),
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter"),
    (re.compile(r"[0-9]"), "Password must contain at least one number"),
    (re.compile(r"[!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>/?]"), "Password must contain at least one special character"),
)


def check_password_strength(password: str) -> str:
    for pattern, message in _PASSWORD_RULES:
        if not pattern.search(password):
            raise ValueError(message)
    return password


def _confirm_matches(confirm: str, info, field: str = "password") -> str:
    if field in info.data and confirm != info.data[field]:
        raise ValueError("Passwords do not match")
    return confirm

# ------------------------------- Authentication Models ------------------------------- #

#                          ------- Incoming -------                           #

class RegisterReq(BaseRequest):
    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    password: str
    confirm_password: str

    @field_validator("password")
    @classmethod
    def strong_password(cls, v):
        return check_password_strength(v)

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, v, info):
        return _confirm_matches(v, info)


class UserLoginReq(BaseRequest):
    email: EmailStr
    password: str = Field(min_length=1)


class ForgotPasswordReq(BaseRequest):
    email: EmailStr


class ResetPasswordReq(BaseRequest):
    token: str = Field(min_length=1, description="Reset token from the emailed link")
    password: str
    confirm_password: str

    @field_validator("password")
    @classmethod
    def strong_password(cls, v):
        return check_password_strength(v)

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, v, info):
        return _confirm_matches(v, info)


class VerifyEmailReq(BaseRequest):
    token: str = Field(min_length=1)


class PasswordChangeReq(BaseRequest):
    current_password: str = Field(min_length=1)
    new_password: str
    confirm_password: str

    @field_validator("new_password")
    @classmethod
    def strong_password(cls, v):
        return check_password_strength(v)

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, v, info):
        return _confirm_matches(v, info, "new_password")

#                          ------- Outgoing -------                           #

class RegisteredUser(CamelModel):
    id: int
    name: str
    email: str


class RegisterData(CamelModel):
    message: str
    user: RegisteredUser


class RegisterResp(BaseResponse):
    data: RegisterData


class AuthData(CamelModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: str
    user: UserOut


class UserLoginResp(BaseResponse):
    """User login response with authentication data"""
    data: Optional[AuthData] = None
