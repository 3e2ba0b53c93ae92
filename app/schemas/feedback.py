# app/schemas/feedback.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class FeedbackCreate(BaseModel):
    order_id: Optional[int] = 0
    rating: Optional[int] = None
    comment: Optional[str] = None


class FeedbackCreated(BaseModel):
    id: int
    user_id: int
    order_id: int
    rating: int
    comment: Optional[str] = None


class FeedbackResponse(FeedbackCreated):
    created_at: Optional[datetime] = None
    username: Optional[str] = None
    service_title: Optional[str] = None
