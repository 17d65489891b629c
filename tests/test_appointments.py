"""고객 예약 API 테스트 — 예약, 변경, 취소, 삭제.

Customer appointment tests — booking validation, updates, cancellation
and deletion rules.
"""

from datetime import timedelta
from decimal import Decimal

from httpx import AsyncClient

from gearsync.models.appointment import AppointmentStatus
from gearsync.models.catalog import Service
from gearsync.utils.clock import utcnow
from tests.conftest import auth_header, tomorrow_at

APPOINTMENTS = "/api/customer/appointments"


def _booking(vehicle, *services, when: str | None = None, notes: str | None = None) -> dict:
    return {
        "vehicle_id": str(vehicle.id),
        "service_ids": [str(s.id) for s in services],
        "scheduled_date_time": when or tomorrow_at(10),
        "customer_notes": notes,
    }


# ===== Booking =====

class TestBookAppointment:
    """예약 생성 테스트."""

    async def test_book_appointment(self, client: AsyncClient, customer_token, vehicle, service):
        """예약 성공 — SCHEDULED, 비용은 서비스 가격 합계."""
        res = await client.post(
            APPOINTMENTS,
            headers=auth_header(customer_token),
            json=_booking(vehicle, service, notes="Rattle on cold start"),
        )
        assert res.status_code == 201
        data = res.json()
        assert data["status"] == "SCHEDULED"
        assert data["progress_percentage"] == 0
        assert data["employee_id"] is None
        assert Decimal(str(data["estimated_cost"])) == Decimal("50.00")
        assert Decimal(str(data["final_cost"])) == Decimal("50.00")
        assert data["estimated_duration_minutes"] == 30
        assert data["vehicle_registration"] == "ABC123"
        assert data["vehicle_description"] == "2020 Toyota Corolla"
        assert [s["name"] for s in data["services"]] == ["Oil Change"]
        assert data["customer_notes"] == "Rattle on cold start"

    async def test_cost_is_sum_of_services(self, client: AsyncClient, db, customer_token, vehicle, service):
        tires = Service(name="Tire Rotation", base_price=Decimal("25.50"), estimated_duration_minutes=20)
        db.add(tires)
        await db.flush()

        res = await client.post(APPOINTMENTS, headers=auth_header(customer_token), json=_booking(vehicle, service, tires))
        assert res.status_code == 201
        assert Decimal(str(res.json()["estimated_cost"])) == Decimal("75.50")
        assert res.json()["estimated_duration_minutes"] == 50

    async def test_book_in_the_past(self, client: AsyncClient, customer_token, vehicle, service):
        past = (utcnow() - timedelta(hours=1)).isoformat()
        res = await client.post(APPOINTMENTS, headers=auth_header(customer_token), json=_booking(vehicle, service, when=past))
        assert res.status_code == 400

    async def test_book_same_slot_twice(self, client: AsyncClient, customer_token, vehicle, service):
        """같은 시각 중복 예약 시 409."""
        body = _booking(vehicle, service, when=tomorrow_at(9))
        first = await client.post(APPOINTMENTS, headers=auth_header(customer_token), json=body)
        assert first.status_code == 201
        second = await client.post(APPOINTMENTS, headers=auth_header(customer_token), json=body)
        assert second.status_code == 409

    async def test_cancelled_slot_can_be_rebooked(self, client: AsyncClient, customer_token, vehicle, service):
        body = _booking(vehicle, service, when=tomorrow_at(11))
        first = await client.post(APPOINTMENTS, headers=auth_header(customer_token), json=body)
        await client.put(f"{APPOINTMENTS}/{first.json()['id']}/cancel", headers=auth_header(customer_token))
        again = await client.post(APPOINTMENTS, headers=auth_header(customer_token), json=body)
        assert again.status_code == 201

    async def test_book_without_services(self, client: AsyncClient, customer_token, vehicle):
        res = await client.post(APPOINTMENTS, headers=auth_header(customer_token), json=_booking(vehicle))
        assert res.status_code == 400

    async def test_book_inactive_service(self, client: AsyncClient, customer_token, vehicle, inactive_service):
        res = await client.post(
            APPOINTMENTS, headers=auth_header(customer_token), json=_booking(vehicle, inactive_service)
        )
        assert res.status_code == 400
        assert res.json()["detail"] == "Service is not available: Retired Wash"

    async def test_book_unknown_service(self, client: AsyncClient, customer_token, vehicle):
        body = _booking(vehicle)
        body["service_ids"] = ["00000000-0000-0000-0000-000000000000"]
        res = await client.post(APPOINTMENTS, headers=auth_header(customer_token), json=body)
        assert res.status_code == 404

    async def test_book_for_someone_elses_vehicle(self, client: AsyncClient, customer_token, other_vehicle, service):
        res = await client.post(
            APPOINTMENTS, headers=auth_header(customer_token), json=_booking(other_vehicle, service)
        )
        assert res.status_code == 403

    async def test_employee_cannot_book(self, client: AsyncClient, employee_token, vehicle, service):
        res = await client.post(APPOINTMENTS, headers=auth_header(employee_token), json=_booking(vehicle, service))
        assert res.status_code == 403


# ===== Listing =====

class TestListAppointments:
    """예약 조회 테스트."""

    async def test_list_only_own(self, client: AsyncClient, customer_token, other_customer_token, make_appointment):
        await make_appointment()
        res = await client.get(APPOINTMENTS, headers=auth_header(customer_token))
        assert len(res.json()) == 1
        res = await client.get(APPOINTMENTS, headers=auth_header(other_customer_token))
        assert res.json() == []

    async def test_get_other_customers_appointment(self, client: AsyncClient, other_customer_token, make_appointment):
        appointment = await make_appointment()
        res = await client.get(f"{APPOINTMENTS}/{appointment.id}", headers=auth_header(other_customer_token))
        assert res.status_code == 403

    async def test_get_missing_appointment(self, client: AsyncClient, customer_token):
        res = await client.get(
            f"{APPOINTMENTS}/00000000-0000-0000-0000-000000000000", headers=auth_header(customer_token)
        )
        assert res.status_code == 404


# ===== Update =====

class TestUpdateAppointment:
    """예약 변경 테스트."""

    async def test_update_notes(self, client: AsyncClient, customer_token, make_appointment):
        appointment = await make_appointment()
        res = await client.put(
            f"{APPOINTMENTS}/{appointment.id}",
            headers=auth_header(customer_token),
            json={"customer_notes": "Please check the wipers too"},
        )
        assert res.status_code == 200
        assert res.json()["customer_notes"] == "Please check the wipers too"
        assert res.json()["status"] == "SCHEDULED"

    async def test_reschedule_confirmed_marks_rescheduled(
        self, client: AsyncClient, customer_token, employee_user, make_appointment
    ):
        """확정된 예약 일정 변경 시 RESCHEDULED."""
        appointment = await make_appointment(status=AppointmentStatus.CONFIRMED, employee=employee_user)
        res = await client.put(
            f"{APPOINTMENTS}/{appointment.id}",
            headers=auth_header(customer_token),
            json={"scheduled_date_time": tomorrow_at(15)},
        )
        assert res.status_code == 200
        assert res.json()["status"] == "RESCHEDULED"

    async def test_reschedule_into_past(self, client: AsyncClient, customer_token, make_appointment):
        appointment = await make_appointment()
        res = await client.put(
            f"{APPOINTMENTS}/{appointment.id}",
            headers=auth_header(customer_token),
            json={"scheduled_date_time": (utcnow() - timedelta(days=1)).isoformat()},
        )
        assert res.status_code == 400

    async def test_unchanged_time_of_past_appointment_is_accepted(
        self, client: AsyncClient, customer_token, employee_user, make_appointment
    ):
        """일시가 그대로면 미래/중복 검사를 하지 않음."""
        scheduled = (utcnow() - timedelta(hours=1)).replace(microsecond=0)
        appointment = await make_appointment(
            status=AppointmentStatus.CONFIRMED, scheduled=scheduled, employee=employee_user
        )
        res = await client.put(
            f"{APPOINTMENTS}/{appointment.id}",
            headers=auth_header(customer_token),
            json={"scheduled_date_time": scheduled.isoformat(), "customer_notes": "gate code 42"},
        )
        assert res.status_code == 200
        assert res.json()["status"] == "CONFIRMED"
        assert res.json()["customer_notes"] == "gate code 42"

    async def test_resend_same_future_time_is_not_a_conflict(self, client: AsyncClient, customer_token, make_appointment):
        scheduled = (utcnow() + timedelta(days=3)).replace(microsecond=0)
        appointment = await make_appointment(scheduled=scheduled)
        res = await client.put(
            f"{APPOINTMENTS}/{appointment.id}",
            headers=auth_header(customer_token),
            json={"scheduled_date_time": scheduled.isoformat()},
        )
        assert res.status_code == 200
        assert res.json()["status"] == "SCHEDULED"

    async def test_reschedule_into_taken_slot(self, client: AsyncClient, customer_token, make_appointment):
        slot = (utcnow() + timedelta(days=3)).replace(microsecond=0)
        await make_appointment(scheduled=slot)
        appointment = await make_appointment()
        res = await client.put(
            f"{APPOINTMENTS}/{appointment.id}",
            headers=auth_header(customer_token),
            json={"scheduled_date_time": slot.isoformat()},
        )
        assert res.status_code == 409

    async def test_reschedule_into_cancelled_slot(self, client: AsyncClient, customer_token, make_appointment):
        slot = (utcnow() + timedelta(days=3)).replace(microsecond=0)
        await make_appointment(status=AppointmentStatus.CANCELLED, scheduled=slot)
        appointment = await make_appointment()
        res = await client.put(
            f"{APPOINTMENTS}/{appointment.id}",
            headers=auth_header(customer_token),
            json={"scheduled_date_time": slot.isoformat()},
        )
        assert res.status_code == 200

    async def test_update_with_no_fields(self, client: AsyncClient, customer_token, make_appointment):
        appointment = await make_appointment()
        res = await client.put(f"{APPOINTMENTS}/{appointment.id}", headers=auth_header(customer_token), json={})
        assert res.status_code == 400

    async def test_update_in_progress_is_locked(self, client: AsyncClient, customer_token, employee_user, make_appointment):
        appointment = await make_appointment(status=AppointmentStatus.IN_PROGRESS, employee=employee_user)
        res = await client.put(
            f"{APPOINTMENTS}/{appointment.id}",
            headers=auth_header(customer_token),
            json={"customer_notes": "too late"},
        )
        assert res.status_code == 409


# ===== Cancel =====

class TestCancelAppointment:
    """예약 취소 테스트."""

    async def test_cancel(self, client: AsyncClient, customer_token, make_appointment):
        appointment = await make_appointment()
        res = await client.put(f"{APPOINTMENTS}/{appointment.id}/cancel", headers=auth_header(customer_token))
        assert res.status_code == 200
        assert res.json()["status"] == "CANCELLED"

    async def test_cancel_twice(self, client: AsyncClient, customer_token, make_appointment):
        appointment = await make_appointment(status=AppointmentStatus.CANCELLED)
        res = await client.put(f"{APPOINTMENTS}/{appointment.id}/cancel", headers=auth_header(customer_token))
        assert res.status_code == 409

    async def test_cancel_completed(self, client: AsyncClient, customer_token, make_appointment):
        appointment = await make_appointment(status=AppointmentStatus.COMPLETED)
        res = await client.put(f"{APPOINTMENTS}/{appointment.id}/cancel", headers=auth_header(customer_token))
        assert res.status_code == 409

    async def test_cancel_in_progress(self, client: AsyncClient, customer_token, employee_user, make_appointment):
        appointment = await make_appointment(status=AppointmentStatus.IN_PROGRESS, employee=employee_user)
        res = await client.put(f"{APPOINTMENTS}/{appointment.id}/cancel", headers=auth_header(customer_token))
        assert res.status_code == 409

    async def test_cancel_no_show(self, client: AsyncClient, customer_token, make_appointment):
        appointment = await make_appointment(status=AppointmentStatus.NO_SHOW)
        res = await client.put(f"{APPOINTMENTS}/{appointment.id}/cancel", headers=auth_header(customer_token))
        assert res.status_code == 200


# ===== Delete =====

class TestDeleteAppointment:
    """예약 삭제 테스트."""

    async def test_delete_scheduled(self, client: AsyncClient, customer_token, make_appointment):
        appointment = await make_appointment()
        res = await client.delete(f"{APPOINTMENTS}/{appointment.id}", headers=auth_header(customer_token))
        assert res.status_code == 204
        res = await client.get(f"{APPOINTMENTS}/{appointment.id}", headers=auth_header(customer_token))
        assert res.status_code == 404

    async def test_delete_in_progress(self, client: AsyncClient, customer_token, employee_user, make_appointment):
        appointment = await make_appointment(status=AppointmentStatus.IN_PROGRESS, employee=employee_user)
        res = await client.delete(f"{APPOINTMENTS}/{appointment.id}", headers=auth_header(customer_token))
        assert res.status_code == 409

    async def test_non_owner_gets_403_before_status_check(
        self, client: AsyncClient, other_customer_token, employee_user, make_appointment
    ):
        """소유권 검사가 상태 검사보다 먼저."""
        appointment = await make_appointment(status=AppointmentStatus.COMPLETED, employee=employee_user)
        res = await client.delete(f"{APPOINTMENTS}/{appointment.id}", headers=auth_header(other_customer_token))
        assert res.status_code == 403
