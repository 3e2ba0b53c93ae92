# app/services/feedback.py
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.db.models.feedback import Feedback
from app.db.repositories.feedback import FeedbackRepository
from app.db.repositories.orders import OrderRepository

logger = logging.getLogger(__name__)

# order_id the frontend sends for a review of the business as a whole
GENERAL_FEEDBACK_ORDER_ID = 0


def feedback_to_dict(feedback: Feedback) -> dict:
    order = feedback.order
    return {
        "id": feedback.id,
        "user_id": feedback.user_id,
        "order_id": feedback.order_id or GENERAL_FEEDBACK_ORDER_ID,
        "rating": feedback.rating,
        "comment": feedback.comment,
        "created_at": feedback.created_at,
        "username": feedback.user.username if feedback.user else None,
        "service_title": order.service.title if order else None,
    }


def submit_feedback(
    feedback: FeedbackRepository,
    orders: OrderRepository,
    user_id: int,
    order_id: Optional[int],
    rating: Optional[int],
    comment: Optional[str] = None,
) -> dict:
    if rating is None or not 1 <= rating <= 5:
        raise ValidationError("Rating must be between 1 and 5")

    order_id = order_id or GENERAL_FEEDBACK_ORDER_ID
    if order_id != GENERAL_FEEDBACK_ORDER_ID:
        if orders.get_owned(order_id, user_id) is None:
            raise NotFoundError("Order not found or does not belong to the user")
        if feedback.get_for_order(order_id) is not None:
            raise ConflictError("Feedback for this order already exists")

    try:
        row = feedback.add(
            Feedback(
                user_id=user_id,
                order_id=order_id or None,
                rating=rating,
                comment=comment or None,
            )
        )
        feedback.commit()
    except IntegrityError as e:
        # lost a race with another submission for the same order
        feedback.rollback()
        raise ConflictError("Feedback for this order already exists") from e

    logger.info(f"Feedback {row.id} submitted by user {user_id} for order {order_id}")
    return {
        "id": row.id,
        "user_id": user_id,
        "order_id": order_id,
        "rating": rating,
        "comment": row.comment,
    }


def list_feedback(feedback: FeedbackRepository) -> list[dict]:
    return [feedback_to_dict(f) for f in feedback.list_newest_first()]
