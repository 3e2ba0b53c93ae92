# app/db/models/service.py

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from app.db.base import Base, utcnow


class Service(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)

    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)

    title = Column(String, nullable=False)
    description = Column(String, nullable=False)

    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)

    # Free text such as "30-60 minutes", shown as-is
    duration = Column(String, nullable=False)

    created_at = Column(DateTime, default=utcnow)

    category = relationship("Category", back_populates="services", lazy="joined")
    orders = relationship("Order", back_populates="service")

    @property
    def category_name(self):
        return self.category.name if self.category else None
