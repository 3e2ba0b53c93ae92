# app/schemas/auth.py
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field

from app.schemas.user import UserPublic


class RegisterRequest(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    role_id: Optional[int] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class PasswordChangeRequest(BaseModel):
    current_password: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("currentPassword", "current_password")
    )
    new_password: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("newPassword", "new_password")
    )


class TokenResponse(BaseModel):
    token: str
    user: UserPublic
