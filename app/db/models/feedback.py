# app/db/models/feedback.py
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base, utcnow


class Feedback(Base):
    __tablename__ = "feedback"
    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_feedback_rating"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    # NULL for a general review that is not tied to an order
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=True, unique=True)

    rating = Column(Integer, nullable=False)   # 1..5
    comment = Column(String, nullable=True)

    created_at = Column(DateTime, default=utcnow)

    user = relationship("User", lazy="joined")
    order = relationship("Order", back_populates="feedback", lazy="joined")
