# app/schemas/service.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class CategoryResponse(BaseModel):
    id: int
    name: str
    description: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Create and update take the same full record
class ServicePayload(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    duration: Optional[str] = None
    category_id: Optional[int] = None


# What API returns
class ServiceResponse(BaseModel):
    id: int
    title: str
    description: str
    price: float
    duration: str
    category: Optional[str] = None
    category_id: int


class ServiceDeleted(BaseModel):
    message: str
    id: int


class ServicesSeeded(BaseModel):
    message: str
    count: int
    services: Optional[List[ServiceResponse]] = None
