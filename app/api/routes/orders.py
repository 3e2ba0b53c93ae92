from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import (
    get_catalog_repo,
    get_current_user,
    get_order_repo,
    get_user_repo,
    require_staff,
)
from app.db.models.user import User
from app.db.repositories.catalog import CatalogRepository
from app.db.repositories.orders import OrderRepository
from app.db.repositories.users import UserRepository
from app.schemas.order import (
    AvailabilityRequest,
    AvailabilityResponse,
    BusyTimesResponse,
    OrderCreate,
    OrderResponse,
    OrderStatusResponse,
    OrderStatusUpdate,
    OrderUpdate,
)
from app.services import orders as order_service
from app.services import scheduling

router = APIRouter(prefix="/orders", tags=["orders"])


# Busy dates for the booking calendar (informational)

@router.get("/busy-times", response_model=BusyTimesResponse)
def busy_times(
    service_id: Optional[int] = Query(None),
    date_from: Optional[str] = Query(None, description="ISO date or datetime"),
    date_to: Optional[str] = Query(None, description="ISO date or datetime"),
    orders: OrderRepository = Depends(get_order_repo),
):
    rows = orders.list_busy(
        service_id=service_id,
        date_from=scheduling.parse_bound(date_from, "date_from"),
        date_to=scheduling.parse_bound(date_to, "date_to", end_of_day=True),
    )
    return scheduling.group_busy_times(rows)


# Past/future check for a requested time

@router.post("/check-availability", response_model=AvailabilityResponse)
def check_availability(payload: AvailabilityRequest):
    return scheduling.check_availability(payload.scheduled_time, payload.service_id)


# Customer creates order

@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    orders: OrderRepository = Depends(get_order_repo),
    users: UserRepository = Depends(get_user_repo),
    catalog: CatalogRepository = Depends(get_catalog_repo),
    current_user: User = Depends(get_current_user),
):
    return order_service.create_order(
        orders,
        users,
        catalog,
        user_id=current_user.id,
        service_id=payload.service_id,
        scheduled_time=payload.scheduled_time,
        address=payload.address,
    )


# Own orders, or every order for staff

@router.get("", response_model=List[OrderResponse])
def list_orders(
    orders: OrderRepository = Depends(get_order_repo),
    current_user: User = Depends(get_current_user),
):
    return order_service.list_orders(orders, current_user.id, current_user.canonical_role)


# Staff edits service, time or address

@router.patch("/{order_id}", response_model=OrderResponse)
def update_order(
    order_id: int,
    payload: OrderUpdate,
    orders: OrderRepository = Depends(get_order_repo),
    catalog: CatalogRepository = Depends(get_catalog_repo),
    current_user: User = Depends(require_staff),
):
    return order_service.update_order(
        orders,
        catalog,
        order_id,
        service_id=payload.service_id,
        scheduled_time=payload.scheduled_time,
        address=payload.address,
    )


# Staff sets status

@router.patch("/{order_id}/status", response_model=OrderStatusResponse)
def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    orders: OrderRepository = Depends(get_order_repo),
    current_user: User = Depends(require_staff),
):
    return order_service.update_order_status(orders, order_id, payload.status)


# Owner (or staff) cancels a pending or confirmed order

@router.post("/{order_id}/cancel", response_model=OrderResponse)
def cancel_order(
    order_id: int,
    orders: OrderRepository = Depends(get_order_repo),
    current_user: User = Depends(get_current_user),
):
    return order_service.cancel_order(orders, order_id, current_user.id, current_user.canonical_role)
