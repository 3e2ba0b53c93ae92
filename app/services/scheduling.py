# app/services/scheduling.py
"""
Past/future rules for booking times and the informational busy-day listing.

Nothing here detects overlaps between orders; busy times are returned for
display only.
"""

from dataclasses import dataclass
from datetime import datetime, time
from typing import Iterable, Optional

from app.core.errors import PastDateError, ValidationError
from app.db.models.order import Order

PAST_DATE_MESSAGE = "Cannot book a date in the past. Please choose today or a future day."
PAST_TIME_MESSAGE = "Cannot book a time in the past. Please choose a future time."
AVAILABLE_MESSAGE = "The selected date and time are available for booking"


@dataclass(frozen=True)
class ScheduledTime:
    value: datetime
    # False when the client sent a bare date
    has_time: bool


def parse_scheduled_time(raw) -> ScheduledTime:
    """
    Accept "YYYY-MM-DD" or any ISO-8601 datetime. Aware datetimes are
    converted to server local time and stored naive.
    """
    if isinstance(raw, datetime):
        value, has_time = raw, True
    else:
        text = str(raw or "").strip()
        if not text:
            raise ValidationError("Scheduled time is required")
        has_time = "T" in text or " " in text
        try:
            value = datetime.fromisoformat(text)
        except ValueError as e:
            raise ValidationError("Scheduled time must be an ISO date or datetime") from e

    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return ScheduledTime(value=value, has_time=has_time)


def past_reason(scheduled: ScheduledTime, now: Optional[datetime] = None) -> Optional[str]:
    """
    Message explaining why the time is in the past, or None if it is not.
    A bare date means midnight of that day.
    """
    now = now or datetime.now()
    if scheduled.value.date() < now.date():
        return PAST_DATE_MESSAGE
    # whole seconds: the current second still counts as "now"
    if scheduled.value.replace(microsecond=0) < now.replace(microsecond=0):
        return PAST_TIME_MESSAGE
    return None


def ensure_not_in_past(scheduled: ScheduledTime, now: Optional[datetime] = None) -> None:
    reason = past_reason(scheduled, now)
    if reason:
        raise PastDateError(reason)


def check_availability(scheduled_time, service_id: Optional[int] = None, now: Optional[datetime] = None) -> dict:
    # service_id is accepted for API symmetry; availability does not depend on it
    if not scheduled_time:
        raise ValidationError("Scheduled time is required")
    reason = past_reason(parse_scheduled_time(scheduled_time), now)
    if reason:
        return {"available": False, "message": reason}
    return {"available": True, "message": AVAILABLE_MESSAGE}


def parse_bound(raw: Optional[str], name: str, end_of_day: bool = False) -> Optional[datetime]:
    """Parse a date_from/date_to filter. A bare upper-bound date covers that whole day."""
    if not raw:
        return None
    try:
        parsed = parse_scheduled_time(raw)
    except ValidationError as e:
        raise ValidationError(f"{name} must be an ISO date or datetime") from e
    if end_of_day and not parsed.has_time:
        return datetime.combine(parsed.value.date(), time.max)
    return parsed.value


def group_busy_times(orders: Iterable[Order]) -> dict:
    busy_times = []
    busy_days: dict[str, list] = {}
    for order in orders:
        service = order.service
        busy_times.append(
            {
                "scheduled_time": order.scheduled_time,
                "title": service.title,
                "duration": service.duration,
                "status": order.status,
            }
        )
        day = order.scheduled_time.date().isoformat()
        busy_days.setdefault(day, []).append(
            {
                "time": order.scheduled_time,
                "service_name": service.title,
                "duration": service.duration,
                "status": order.status,
            }
        )
    return {"busy_times": busy_times, "busy_days": busy_days}
