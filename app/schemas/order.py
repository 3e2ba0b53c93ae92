from datetime import datetime
from typing import Dict, List, Optional

from pydantic import AliasChoices, BaseModel, Field


class OrderCreate(BaseModel):
    service_id: Optional[int] = Field(default=None, validation_alias=AliasChoices("service_id", "serviceId"))
    scheduled_time: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("scheduled_time", "scheduledTime")
    )
    address: Optional[str] = None


class AvailabilityRequest(BaseModel):
    service_id: Optional[int] = Field(default=None, validation_alias=AliasChoices("service_id", "serviceId"))
    scheduled_time: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("scheduled_time", "scheduledTime")
    )


class AvailabilityResponse(BaseModel):
    available: bool
    message: str


# --- UPDATE (admin or employee) ---
class OrderUpdate(BaseModel):
    service_id: Optional[int] = Field(default=None, validation_alias=AliasChoices("service_id", "serviceId"))
    scheduled_time: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("scheduled_time", "scheduledTime")
    )
    address: Optional[str] = None


class OrderStatusUpdate(BaseModel):
    status: Optional[str] = Field(
        default=None,
        description="Allowed values: pending, confirmed, completed, cancelled"
    )


class OrderStatusResponse(BaseModel):
    id: int
    status: str
    updated: bool = True


# --- RESPONSE ---
class OrderResponse(BaseModel):
    id: int
    user_id: int
    service_id: int
    status: str
    discount_applied: bool
    final_price: float
    address: Optional[str] = None
    scheduled_time: datetime
    created_at: Optional[datetime] = None

    service_title: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    service_description: Optional[str] = None
    duration: Optional[str] = None

    # staff view only
    user_name: Optional[str] = None
    user_email: Optional[str] = None


class BusyTime(BaseModel):
    scheduled_time: datetime
    title: str
    duration: str
    status: str


class BusySlot(BaseModel):
    time: datetime
    service_name: str = Field(alias="serviceName")
    duration: str
    status: str

    class Config:
        populate_by_name = True


class BusyTimesResponse(BaseModel):
    busy_times: List[BusyTime]
    busy_days: Dict[str, List[BusySlot]]
