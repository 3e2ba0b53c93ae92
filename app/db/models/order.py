# app/db/models/order.py
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from app.db.base import Base, utcnow


class Order(Base):
    __tablename__ = "orders"
    # ix_orders_status_scheduled_time is created by migration 3

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False)

    status = Column(String, nullable=False, default="pending")
    discount_applied = Column(Boolean, nullable=False, default=False)

    # price of the service when the order was placed or last edited
    final_price = Column(Numeric(10, 2, asdecimal=False), nullable=False)

    address = Column(String, nullable=True)
    scheduled_time = Column(DateTime, nullable=False)

    created_at = Column(DateTime, default=utcnow)

    # relationships
    user = relationship("User", back_populates="orders", lazy="joined")
    service = relationship("Service", back_populates="orders", lazy="joined")
    feedback = relationship("Feedback", back_populates="order", uselist=False)
