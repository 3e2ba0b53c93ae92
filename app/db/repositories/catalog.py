# app/db/repositories/catalog.py
from typing import List, Optional

from sqlalchemy import delete, func, select

from app.db.models.category import Category
from app.db.models.order import Order
from app.db.models.service import Service
from app.db.repositories.base import SqlRepository


class CatalogRepository(SqlRepository):
    """Categories and services."""

    # --- categories ---

    def list_categories(self) -> List[Category]:
        return list(self.db.scalars(select(Category).order_by(Category.name.asc())))

    def list_categories_by_id(self) -> List[Category]:
        return list(self.db.scalars(select(Category).order_by(Category.id.asc())))

    def get_category(self, category_id: int) -> Optional[Category]:
        return self.db.get(Category, category_id)

    def count_categories(self) -> int:
        return self.db.scalar(select(func.count(Category.id))) or 0

    # --- services ---

    def list_services(self) -> List[Service]:
        return list(self.db.scalars(select(Service).order_by(Service.id.asc())))

    def get_service(self, service_id: int) -> Optional[Service]:
        return self.db.get(Service, service_id)

    def count_services(self) -> int:
        return self.db.scalar(select(func.count(Service.id))) or 0

    def count_orders_for_service(self, service_id: int) -> int:
        return self.db.scalar(select(func.count(Order.id)).where(Order.service_id == service_id)) or 0

    def delete_service(self, service_id: int) -> int:
        """Delete by id; returns the number of rows removed."""
        result = self.db.execute(delete(Service).where(Service.id == service_id))
        return result.rowcount
