from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel


class UserPublic(BaseModel):
    id: int
    username: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    role: Optional[str] = None
    role_id: int

    class Config:
        from_attributes = True


class ProfileResponse(UserPublic):
    full_name: Optional[str] = None
    birthday: Optional[date] = None
    discount_amount: float = 0
    created_at: Optional[datetime] = None


class ProfileUpdate(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
