# app/api/routes/feedback.py
from typing import List

from fastapi import APIRouter, Depends, status

from app.api.deps import get_current_user, get_feedback_repo, get_order_repo
from app.db.models.user import User
from app.db.repositories.feedback import FeedbackRepository
from app.db.repositories.orders import OrderRepository
from app.schemas.feedback import FeedbackCreate, FeedbackCreated, FeedbackResponse
from app.services import feedback as feedback_service

router = APIRouter(prefix="/feedback", tags=["feedback"])


# Create feedback (order-linked, or general with order_id 0)
@router.post("", response_model=FeedbackCreated, status_code=status.HTTP_201_CREATED)
def submit_feedback(
    payload: FeedbackCreate,
    feedback: FeedbackRepository = Depends(get_feedback_repo),
    orders: OrderRepository = Depends(get_order_repo),
    current_user: User = Depends(get_current_user),
):
    return feedback_service.submit_feedback(
        feedback,
        orders,
        user_id=current_user.id,
        order_id=payload.order_id,
        rating=payload.rating,
        comment=payload.comment,
    )


# List feedback (public)
@router.get("", response_model=List[FeedbackResponse])
def list_feedback(feedback: FeedbackRepository = Depends(get_feedback_repo)):
    return feedback_service.list_feedback(feedback)
