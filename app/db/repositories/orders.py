# app/db/repositories/orders.py
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select

from app.db.models.order import Order
from app.db.repositories.base import SqlRepository


class OrderRepository(SqlRepository):

    def get(self, order_id: int) -> Optional[Order]:
        return self.db.get(Order, order_id)

    def get_owned(self, order_id: int, user_id: int) -> Optional[Order]:
        return self.db.scalars(
            select(Order).where(Order.id == order_id, Order.user_id == user_id)
        ).first()

    def list_all(self) -> List[Order]:
        return list(self.db.scalars(select(Order).order_by(Order.created_at.desc(), Order.id.desc())))

    def list_for_user(self, user_id: int) -> List[Order]:
        return list(
            self.db.scalars(
                select(Order)
                .where(Order.user_id == user_id)
                .order_by(Order.created_at.desc(), Order.id.desc())
            )
        )

    def list_busy(
        self,
        service_id: Optional[int] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> List[Order]:
        """Non-cancelled orders in the window, earliest first."""
        stmt = select(Order).where(Order.status != "cancelled")
        if service_id:
            stmt = stmt.where(Order.service_id == service_id)
        if date_from is not None:
            stmt = stmt.where(Order.scheduled_time >= date_from)
        if date_to is not None:
            stmt = stmt.where(Order.scheduled_time <= date_to)
        return list(self.db.scalars(stmt.order_by(Order.scheduled_time.asc())))
