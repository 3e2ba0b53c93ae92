# app/services/orders.py
"""
Order lifecycle.

    pending -> confirmed -> completed
    pending | confirmed -> cancelled

Staff may set any status through the status endpoint; the graph above is
enforced only by cancel_order.
"""

import logging
from datetime import datetime
from typing import Optional

from app.core.errors import NotFoundError, ValidationError
from app.core.roles import STAFF_ROLES, Role
from app.db.models.order import Order
from app.db.repositories.catalog import CatalogRepository
from app.db.repositories.orders import OrderRepository
from app.db.repositories.users import UserRepository
from app.services.scheduling import ensure_not_in_past, parse_scheduled_time

logger = logging.getLogger(__name__)

ORDER_STATUSES = ("pending", "confirmed", "completed", "cancelled")
CANCELLABLE_STATUSES = ("pending", "confirmed")


def order_to_dict(order: Order, include_requester: bool = False) -> dict:
    service = order.service
    data = {
        "id": order.id,
        "user_id": order.user_id,
        "service_id": order.service_id,
        "status": order.status,
        "discount_applied": bool(order.discount_applied),
        "final_price": order.final_price,
        "address": order.address,
        "scheduled_time": order.scheduled_time,
        "created_at": order.created_at,
        "service_title": service.title,
        "title": service.title,
        "description": service.description,
        "service_description": service.description,
        "duration": service.duration,
    }
    if include_requester:
        data["user_name"] = order.user.username
        data["user_email"] = order.user.email
    return data


def create_order(
    orders: OrderRepository,
    users: UserRepository,
    catalog: CatalogRepository,
    user_id: int,
    service_id: Optional[int],
    scheduled_time,
    address: Optional[str] = None,
    now: Optional[datetime] = None,
) -> dict:
    if not service_id or not scheduled_time:
        raise ValidationError("Service and scheduled time are required")

    scheduled = parse_scheduled_time(scheduled_time)
    ensure_not_in_past(scheduled, now)

    if users.get(user_id) is None:
        raise NotFoundError("User not found")

    service = catalog.get_service(service_id)
    if service is None:
        raise NotFoundError("Service not found")

    order = orders.add(
        Order(
            user_id=user_id,
            service_id=service.id,
            status="pending",
            discount_applied=False,
            final_price=service.price,
            address=address or "",
            scheduled_time=scheduled.value,
        )
    )
    orders.commit()
    orders.refresh(order)
    logger.info(f"Order {order.id} created by user {user_id} for service {service.id}")
    return order_to_dict(order)


def list_orders(orders: OrderRepository, user_id: int, role: Role) -> list[dict]:
    """Staff see every order; everyone else sees only their own."""
    if role in STAFF_ROLES:
        return [order_to_dict(o, include_requester=True) for o in orders.list_all()]
    return [order_to_dict(o) for o in orders.list_for_user(user_id)]


def update_order(
    orders: OrderRepository,
    catalog: CatalogRepository,
    order_id: int,
    service_id: Optional[int] = None,
    scheduled_time=None,
    address: Optional[str] = None,
) -> dict:
    order = orders.get(order_id)
    if order is None:
        raise NotFoundError("Order not found")

    service = catalog.get_service(service_id or order.service_id)
    if service is None:
        raise NotFoundError("Service not found")

    if scheduled_time:
        order.scheduled_time = parse_scheduled_time(scheduled_time).value
    if address is not None:
        order.address = address
    order.service_id = service.id
    order.final_price = service.price

    orders.commit()
    orders.refresh(order)
    logger.info(f"Order {order_id} updated")
    return order_to_dict(order)


def update_order_status(orders: OrderRepository, order_id: int, status: Optional[str]) -> dict:
    if status not in ORDER_STATUSES:
        raise ValidationError("Invalid status")

    order = orders.get(order_id)
    if order is None:
        raise NotFoundError("Order not found")

    order.status = status
    orders.commit()
    logger.info(f"Order {order_id} status set to {status}")
    return {"id": order_id, "status": status, "updated": True}


def cancel_order(orders: OrderRepository, order_id: int, user_id: int, role: Role) -> dict:
    if role in STAFF_ROLES:
        order = orders.get(order_id)
    else:
        order = orders.get_owned(order_id, user_id)
    if order is None:
        raise NotFoundError("Order not found")

    if order.status not in CANCELLABLE_STATUSES:
        raise ValidationError(f"Cannot cancel an order that is already {order.status}")

    order.status = "cancelled"
    orders.commit()
    orders.refresh(order)
    logger.info(f"Order {order_id} cancelled by user {user_id}")
    return order_to_dict(order, include_requester=role in STAFF_ROLES)
