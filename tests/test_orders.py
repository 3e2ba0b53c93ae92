from datetime import date, datetime, timedelta

import pytest

from app.core.errors import NotFoundError, PastDateError, ValidationError
from app.db.repositories.catalog import CatalogRepository
from app.db.repositories.orders import OrderRepository
from app.db.repositories.users import UserRepository
from app.services import orders as order_service
from app.services.scheduling import (
    PAST_DATE_MESSAGE,
    PAST_TIME_MESSAGE,
    check_availability,
    ensure_not_in_past,
    parse_bound,
    parse_scheduled_time,
    past_reason,
)
from conftest import ADMIN, auth_header, future_time, login

NOW = datetime(2030, 6, 15, 14, 30, 0, 250000)


@pytest.mark.orders
class TestScheduledTime:
    """Test suite for parsing and past/future rules, with a fixed clock."""

    def test_bare_date_has_no_time(self):
        parsed = parse_scheduled_time("2030-06-15")

        assert parsed.value == datetime(2030, 6, 15)
        assert parsed.has_time is False

    def test_datetime_has_time(self):
        parsed = parse_scheduled_time("2030-06-15T09:00:00")

        assert parsed.value == datetime(2030, 6, 15, 9)
        assert parsed.has_time is True

    def test_aware_datetime_is_stored_naive(self):
        parsed = parse_scheduled_time("2030-06-15T09:00:00+00:00")

        assert parsed.value.tzinfo is None

    @pytest.mark.parametrize("raw", ["", "tomorrow", "2030-13-01"])
    def test_invalid_values(self, raw):
        with pytest.raises(ValidationError):
            parse_scheduled_time(raw)

    def test_yesterday_is_past(self):
        assert past_reason(parse_scheduled_time("2030-06-14"), NOW) == PAST_DATE_MESSAGE

    def test_today_as_bare_date_is_past(self):
        """A bare date means midnight, which has already passed today."""
        assert past_reason(parse_scheduled_time("2030-06-15"), NOW) == PAST_TIME_MESSAGE

    def test_today_as_bare_date_at_midnight(self):
        assert past_reason(parse_scheduled_time("2030-06-15"), datetime(2030, 6, 15, 0, 0, 0, 900000)) is None

    def test_tomorrow_as_bare_date_is_allowed(self):
        assert past_reason(parse_scheduled_time("2030-06-16"), NOW) is None

    def test_earlier_today_is_past(self):
        assert past_reason(parse_scheduled_time("2030-06-15T14:29:59"), NOW) == PAST_TIME_MESSAGE

    def test_current_second_is_allowed(self):
        assert past_reason(parse_scheduled_time("2030-06-15T14:30:00"), NOW) is None

    def test_later_today_is_allowed(self):
        assert past_reason(parse_scheduled_time("2030-06-15T18:00"), NOW) is None

    def test_ensure_not_in_past_raises_with_available_flag(self):
        with pytest.raises(PastDateError) as exc_info:
            ensure_not_in_past(parse_scheduled_time("2030-06-14T10:00"), NOW)

        assert exc_info.value.status_code == 400
        assert exc_info.value.to_dict()["available"] is False

    def test_check_availability(self):
        assert check_availability("2030-06-16T10:00", now=NOW)["available"] is True
        result = check_availability("2030-06-10", now=NOW)
        assert result == {"available": False, "message": PAST_DATE_MESSAGE}

    def test_check_availability_requires_time(self):
        with pytest.raises(ValidationError):
            check_availability(None, now=NOW)

    def test_upper_bound_date_covers_whole_day(self):
        bound = parse_bound("2030-06-15", "date_to", end_of_day=True)

        assert bound.date() == date(2030, 6, 15)
        assert bound.hour == 23

    def test_lower_bound_is_start_of_day(self):
        assert parse_bound("2030-06-15", "date_from") == datetime(2030, 6, 15)

    def test_bad_bound(self):
        with pytest.raises(ValidationError):
            parse_bound("soon", "date_from")


@pytest.mark.orders
class TestCreateOrder:
    """Test suite for booking a service."""

    def test_create_order(self, client, user_headers, services):
        service = services[0]

        response = client.post(
            "/api/orders",
            json={"service_id": service["id"], "scheduled_time": future_time(), "address": "1 Main St"},
            headers=user_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "pending"
        assert data["final_price"] == service["price"]
        assert data["discount_applied"] is False
        assert data["address"] == "1 Main St"
        assert data["service_title"] == service["title"]

    def test_create_order_camel_case(self, client, user_headers, services):
        response = client.post(
            "/api/orders",
            json={"serviceId": services[1]["id"], "scheduledTime": future_time(days=3)},
            headers=user_headers,
        )

        assert response.status_code == 201
        assert response.json()["service_id"] == services[1]["id"]

    def test_create_order_in_the_past(self, client, user_headers, services):
        response = client.post(
            "/api/orders",
            json={"service_id": services[0]["id"], "scheduled_time": "2000-01-01"},
            headers=user_headers,
        )

        assert response.status_code == 400
        assert response.json()["available"] is False
        assert client.get("/api/orders", headers=user_headers).json() == []

    def test_create_order_for_today_as_bare_date(self, db_session, registered_user, services):
        """Booking "today" without a time lands at midnight and is refused."""
        now = datetime.now().replace(hour=9, minute=0, second=0, microsecond=0)
        args = (
            OrderRepository(db_session),
            UserRepository(db_session),
            CatalogRepository(db_session),
            registered_user["user"]["id"],
        )

        with pytest.raises(PastDateError) as exc_info:
            order_service.create_order(*args, services[0]["id"], now.date().isoformat(), now=now)

        assert exc_info.value.message == PAST_TIME_MESSAGE
        assert OrderRepository(db_session).list_for_user(registered_user["user"]["id"]) == []

    def test_check_availability_for_today_as_bare_date(self):
        result = check_availability("2030-06-15", now=NOW)

        assert result == {"available": False, "message": PAST_TIME_MESSAGE}

    def test_create_order_unknown_service(self, client, user_headers, services):
        response = client.post(
            "/api/orders",
            json={"service_id": 999, "scheduled_time": future_time()},
            headers=user_headers,
        )

        assert response.status_code == 404

    @pytest.mark.parametrize("payload", [{"scheduled_time": "2099-01-01"}, {"service_id": 1}])
    def test_create_order_missing_fields(self, client, user_headers, services, payload):
        response = client.post("/api/orders", json=payload, headers=user_headers)

        assert response.status_code == 400

    def test_create_order_requires_login(self, client, services):
        response = client.post(
            "/api/orders", json={"service_id": services[0]["id"], "scheduled_time": future_time()}
        )

        assert response.status_code == 401

    def test_price_is_a_snapshot(self, client, admin_headers, order):
        """Repricing a service leaves existing orders untouched."""
        client.put(
            f"/api/services/{order['service_id']}",
            json={
                "title": "Septic tank pumping",
                "description": "Now more expensive",
                "price": 9999,
                "duration": "30-60 minutes",
                "category_id": 1,
            },
            headers=admin_headers,
        )

        orders = client.get("/api/orders", headers=admin_headers).json()

        assert orders[0]["final_price"] == order["final_price"]

    def test_service_layer_uses_injected_clock(self, db_session, registered_user, services):
        orders = OrderRepository(db_session)
        args = (orders, UserRepository(db_session), CatalogRepository(db_session), registered_user["user"]["id"])
        now = datetime.now().replace(microsecond=0)

        with pytest.raises(PastDateError):
            order_service.create_order(*args, services[0]["id"], (now - timedelta(seconds=1)).isoformat(), now=now)

        created = order_service.create_order(*args, services[0]["id"], now.isoformat(), now=now)
        assert created["scheduled_time"] == now


@pytest.mark.orders
class TestOrderScenario:
    """End-to-end booking flow across guest and admin."""

    def test_book_confirm_and_view(self, client, user_headers, services):
        created = client.post(
            "/api/orders",
            json={"service_id": services[0]["id"], "scheduled_time": future_time()},
            headers=user_headers,
        ).json()

        mine = client.get("/api/orders", headers=user_headers).json()
        assert [o["id"] for o in mine] == [created["id"]]

        admin_headers = login(client, ADMIN)
        everything = client.get("/api/orders", headers=admin_headers).json()
        assert created["id"] in [o["id"] for o in everything]
        staff_view = next(o for o in everything if o["id"] == created["id"])
        assert staff_view["user_name"] == "newuser"
        assert staff_view["user_email"] == "newuser@example.com"

        response = client.patch(
            f"/api/orders/{created['id']}/status", json={"status": "confirmed"}, headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json() == {"id": created["id"], "status": "confirmed", "updated": True}

        mine = client.get("/api/orders", headers=user_headers).json()
        assert mine[0]["status"] == "confirmed"

    def test_guest_sees_only_own_orders(self, client, guest_headers, order):
        assert client.get("/api/orders", headers=guest_headers).json() == []

    def test_own_orders_newest_first(self, client, user_headers, services, order):
        second = client.post(
            "/api/orders",
            json={"service_id": services[1]["id"], "scheduled_time": future_time(days=5)},
            headers=user_headers,
        ).json()

        ids = [o["id"] for o in client.get("/api/orders", headers=user_headers).json()]

        assert ids == [second["id"], order["id"]]


@pytest.mark.orders
class TestOrderStatus:
    """Test suite for staff status changes."""

    @pytest.mark.parametrize("status", ["pending", "confirmed", "completed", "cancelled"])
    def test_every_status_is_accepted(self, client, employee_headers, order, status):
        response = client.patch(f"/api/orders/{order['id']}/status", json={"status": status}, headers=employee_headers)

        assert response.status_code == 200
        assert response.json()["status"] == status

    def test_unknown_status(self, client, admin_headers, order):
        response = client.patch(f"/api/orders/{order['id']}/status", json={"status": "done"}, headers=admin_headers)

        assert response.status_code == 400

    def test_missing_order(self, client, admin_headers):
        response = client.patch("/api/orders/999/status", json={"status": "confirmed"}, headers=admin_headers)

        assert response.status_code == 404

    def test_guest_cannot_change_status(self, client, user_headers, order):
        response = client.patch(f"/api/orders/{order['id']}/status", json={"status": "confirmed"}, headers=user_headers)

        assert response.status_code == 403


@pytest.mark.orders
class TestUpdateOrder:
    """Test suite for staff edits of an order."""

    def test_change_service_reprices(self, client, admin_headers, services, order):
        target = services[2]

        response = client.patch(f"/api/orders/{order['id']}", json={"serviceId": target["id"]}, headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["service_id"] == target["id"]
        assert data["final_price"] == target["price"]
        assert data["address"] == order["address"]
        assert data["scheduled_time"] == order["scheduled_time"]

    def test_change_time_and_address(self, client, employee_headers, order):
        new_time = future_time(days=10)

        response = client.patch(
            f"/api/orders/{order['id']}",
            json={"scheduled_time": new_time, "address": "2 Side St"},
            headers=employee_headers,
        )

        assert response.status_code == 200
        assert response.json()["scheduled_time"] == new_time
        assert response.json()["address"] == "2 Side St"

    def test_unknown_service(self, client, admin_headers, order):
        response = client.patch(f"/api/orders/{order['id']}", json={"service_id": 999}, headers=admin_headers)

        assert response.status_code == 404

    def test_missing_order(self, client, admin_headers, services):
        response = client.patch("/api/orders/999", json={"service_id": services[0]["id"]}, headers=admin_headers)

        assert response.status_code == 404

    def test_guest_cannot_edit(self, client, user_headers, order):
        response = client.patch(f"/api/orders/{order['id']}", json={"address": "x"}, headers=user_headers)

        assert response.status_code == 403

    def test_service_layer_missing_order(self, db_session, client):
        with pytest.raises(NotFoundError):
            order_service.update_order(OrderRepository(db_session), CatalogRepository(db_session), 12345)


@pytest.mark.orders
class TestCancelOrder:
    """Test suite for cancelling pending or confirmed orders."""

    def test_owner_cancels_pending_order(self, client, user_headers, order):
        response = client.post(f"/api/orders/{order['id']}/cancel", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"

    def test_owner_cancels_confirmed_order(self, client, user_headers, admin_headers, order):
        client.patch(f"/api/orders/{order['id']}/status", json={"status": "confirmed"}, headers=admin_headers)

        response = client.post(f"/api/orders/{order['id']}/cancel", headers=user_headers)

        assert response.status_code == 200

    @pytest.mark.parametrize("status", ["completed", "cancelled"])
    def test_cannot_cancel_finished_order(self, client, user_headers, admin_headers, order, status):
        client.patch(f"/api/orders/{order['id']}/status", json={"status": status}, headers=admin_headers)

        response = client.post(f"/api/orders/{order['id']}/cancel", headers=user_headers)

        assert response.status_code == 400

    def test_other_guest_cannot_cancel(self, client, guest_headers, order):
        response = client.post(f"/api/orders/{order['id']}/cancel", headers=guest_headers)

        assert response.status_code == 404

    def test_staff_cancels_any_order(self, client, employee_headers, order):
        response = client.post(f"/api/orders/{order['id']}/cancel", headers=employee_headers)

        assert response.status_code == 200
        assert response.json()["user_name"] == "newuser"


@pytest.mark.orders
class TestAvailability:
    """Test suite for the informational availability endpoints."""

    def test_future_time_is_available(self, client):
        response = client.post("/api/orders/check-availability", json={"scheduledTime": future_time(), "serviceId": 1})

        assert response.status_code == 200
        assert response.json()["available"] is True

    def test_past_date_is_not_available(self, client):
        response = client.post("/api/orders/check-availability", json={"scheduled_time": "2001-02-03"})

        assert response.status_code == 200
        assert response.json() == {"available": False, "message": PAST_DATE_MESSAGE}

    def test_booked_slot_is_still_available(self, client, order):
        """Existing orders do not block a time."""
        response = client.post("/api/orders/check-availability", json={"scheduled_time": order["scheduled_time"]})

        assert response.json()["available"] is True

    def test_missing_time(self, client):
        assert client.post("/api/orders/check-availability", json={}).status_code == 400

    def test_busy_times_grouped_by_day(self, client, order):
        response = client.get("/api/orders/busy-times")

        assert response.status_code == 200
        data = response.json()
        day = order["scheduled_time"][:10]
        assert len(data["busy_times"]) == 1
        assert data["busy_times"][0]["title"] == order["service_title"]
        slot = data["busy_days"][day][0]
        assert slot["serviceName"] == order["service_title"]
        assert slot["status"] == "pending"
        assert slot["time"] == order["scheduled_time"]

    def test_busy_times_skip_cancelled(self, client, user_headers, order):
        client.post(f"/api/orders/{order['id']}/cancel", headers=user_headers)

        data = client.get("/api/orders/busy-times").json()

        assert data == {"busy_times": [], "busy_days": {}}

    def test_busy_times_filters(self, client, user_headers, services, order):
        client.post(
            "/api/orders",
            json={"service_id": services[1]["id"], "scheduled_time": future_time(days=20)},
            headers=user_headers,
        )
        day = order["scheduled_time"][:10]

        by_service = client.get("/api/orders/busy-times", params={"service_id": services[1]["id"]}).json()
        by_day = client.get("/api/orders/busy-times", params={"date_from": day, "date_to": day}).json()

        assert len(by_service["busy_times"]) == 1
        assert list(by_day["busy_days"]) == [day]

    def test_busy_times_bad_bound(self, client):
        response = client.get("/api/orders/busy-times", params={"date_from": "whenever"})

        assert response.status_code == 400

    def test_busy_times_is_public(self, client):
        assert client.get("/api/orders/busy-times", headers=auth_header("garbage")).status_code == 200
