# app/schemas/admin.py
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel


class UserListItem(BaseModel):
    id: int
    username: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    role: Optional[str] = None
    role_id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RoleChange(BaseModel):
    role_id: Optional[int] = None


class RoleChangeResponse(BaseModel):
    id: int
    username: str
    role: Optional[str] = None


class AdminProfileUpdate(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    full_name: Optional[str] = None
    birthday: Optional[date] = None
    discount_amount: Optional[float] = None
