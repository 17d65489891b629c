"""관리자 API 테스트 — 직원 계정, 예약 배정, 고객 조회.

Admin API tests — Staff provisioning, appointment assignment and
customer overview.
"""

import re
from decimal import Decimal

from httpx import AsyncClient

from gearsync.models.appointment import AppointmentStatus
from tests.conftest import auth_header

ADMIN = "/api/admin"


def _temporary_password(outbox: list[dict]) -> str:
    match = re.search(r"Temporary password: (\S+)\n", outbox[-1]["text"])
    assert match is not None
    return match.group(1)


# ===== Staff accounts =====

class TestStaffAccounts:
    """직원/관리자 계정 생성 및 관리 테스트."""

    async def test_create_employee_sends_credentials(self, client: AsyncClient, admin_token, outbox):
        """직원 생성 → 임시 비밀번호 메일 → 첫 로그인 플래그."""
        res = await client.post(f"{ADMIN}/employees", headers=auth_header(admin_token), json={
            "email": "Mechanic@Shop.com",
            "first_name": "Max",
            "last_name": "Mechanic",
        })
        assert res.status_code == 201
        data = res.json()
        assert data["role"] == "EMPLOYEE"
        assert data["email"] == "mechanic@shop.com"
        assert data["is_first_login"] is True
        assert outbox[-1]["to"] == "mechanic@shop.com"

        password = _temporary_password(outbox)
        res = await client.post("/api/auth/login", json={"email": "mechanic@shop.com", "password": password})
        assert res.status_code == 200
        assert res.json()["role"] == "EMPLOYEE"
        assert res.json()["is_first_login"] is True

    async def test_create_admin(self, client: AsyncClient, admin_token):
        res = await client.post(f"{ADMIN}/admins", headers=auth_header(admin_token), json={
            "email": "boss@shop.com",
            "first_name": "Bo",
            "last_name": "Boss",
        })
        assert res.status_code == 201
        assert res.json()["role"] == "ADMIN"

    async def test_create_employee_duplicate_email(self, client: AsyncClient, admin_token, customer_user):
        res = await client.post(f"{ADMIN}/employees", headers=auth_header(admin_token), json={
            "email": "cust@test.com",
            "first_name": "Dup",
            "last_name": "Licate",
        })
        assert res.status_code == 409

    async def test_employee_cannot_create_staff(self, client: AsyncClient, employee_token):
        res = await client.post(f"{ADMIN}/employees", headers=auth_header(employee_token), json={
            "email": "x@shop.com",
            "first_name": "X",
            "last_name": "Y",
        })
        assert res.status_code == 403

    async def test_list_employees(self, client: AsyncClient, admin_token, employee_user, inactive_employee):
        res = await client.get(f"{ADMIN}/employees", headers=auth_header(admin_token))
        assert {e["email"] for e in res.json()} == {"tech@test.com", "gone@test.com"}

        res = await client.get(f"{ADMIN}/employees/active", headers=auth_header(admin_token))
        assert [e["email"] for e in res.json()] == ["tech@test.com"]

    async def test_employee_detail_counts(
        self, client: AsyncClient, admin_token, employee_user, make_appointment, make_project
    ):
        await make_appointment(status=AppointmentStatus.CONFIRMED, employee=employee_user)
        await make_appointment(status=AppointmentStatus.COMPLETED, employee=employee_user)
        await make_project(employee=employee_user)

        res = await client.get(f"{ADMIN}/employees/{employee_user.id}", headers=auth_header(admin_token))
        assert res.status_code == 200
        data = res.json()
        assert data["assigned_appointment_count"] == 2
        assert data["completed_appointment_count"] == 1
        assert data["assigned_project_count"] == 1
        assert data["completed_project_count"] == 0

    async def test_employee_detail_for_customer_id(self, client: AsyncClient, admin_token, customer_user):
        res = await client.get(f"{ADMIN}/employees/{customer_user.id}", headers=auth_header(admin_token))
        assert res.status_code == 400
        assert res.json()["detail"] == "User is not an employee"

    async def test_employee_detail_unknown_id(self, client: AsyncClient, admin_token):
        res = await client.get(f"{ADMIN}/employees/00000000-0000-0000-0000-000000000000", headers=auth_header(admin_token))
        assert res.status_code == 404

    async def test_deactivate_employee(self, client: AsyncClient, admin_token, employee_user):
        res = await client.put(
            f"{ADMIN}/employees/{employee_user.id}",
            headers=auth_header(admin_token),
            json={"is_active": False, "phone_number": "555-0101"},
        )
        assert res.status_code == 200
        assert res.json()["is_active"] is False
        assert res.json()["phone_number"] == "555-0101"

    async def test_admin_cannot_deactivate_self(self, client: AsyncClient, admin_token, admin_user):
        res = await client.put(
            f"{ADMIN}/employees/{admin_user.id}",
            headers=auth_header(admin_token),
            json={"is_active": False},
        )
        assert res.status_code == 400
        assert admin_user.is_active is True


# ===== Appointment assignment =====

class TestAppointmentAssignment:
    """예약 배정 테스트."""

    async def test_assign_confirms_and_emails_once(
        self, client: AsyncClient, admin_token, employee_user, make_appointment, outbox
    ):
        """배정 → CONFIRMED, 확인 메일 정확히 1통."""
        appointment = await make_appointment()
        res = await client.put(
            f"{ADMIN}/appointments/{appointment.id}/assign",
            headers=auth_header(admin_token),
            json={"employee_id": str(employee_user.id), "final_cost": "65.00", "admin_notes": "Check brakes too"},
        )
        assert res.status_code == 200
        data = res.json()
        assert data["status"] == "CONFIRMED"
        assert data["employee_id"] == str(employee_user.id)
        assert data["employee_name"] == "Tom Tech"
        assert Decimal(str(data["final_cost"])) == Decimal("65.00")
        assert Decimal(str(data["estimated_cost"])) == Decimal("50.00")
        assert re.match(r"^\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}\] Admin: Check brakes too$", data["employee_notes"])
        assert len(outbox) == 1
        assert outbox[0]["to"] == "cust@test.com"
        assert outbox[0]["subject"] == "Your appointment is confirmed"

    async def test_reassign_keeps_confirmed(
        self, client: AsyncClient, admin_token, employee_user, other_employee, make_appointment, outbox
    ):
        appointment = await make_appointment(status=AppointmentStatus.CONFIRMED, employee=employee_user)
        res = await client.put(
            f"{ADMIN}/appointments/{appointment.id}/reassign",
            headers=auth_header(admin_token),
            json={"employee_id": str(other_employee.id)},
        )
        assert res.status_code == 200
        assert res.json()["employee_id"] == str(other_employee.id)
        assert res.json()["status"] == "CONFIRMED"
        assert len(outbox) == 1

    async def test_assign_inactive_employee(self, client: AsyncClient, admin_token, inactive_employee, make_appointment):
        appointment = await make_appointment()
        res = await client.put(
            f"{ADMIN}/appointments/{appointment.id}/assign",
            headers=auth_header(admin_token),
            json={"employee_id": str(inactive_employee.id)},
        )
        assert res.status_code == 400
        assert res.json()["detail"] == "Cannot assign inactive employee"

    async def test_assign_customer_as_employee(self, client: AsyncClient, admin_token, other_customer, make_appointment):
        appointment = await make_appointment()
        res = await client.put(
            f"{ADMIN}/appointments/{appointment.id}/assign",
            headers=auth_header(admin_token),
            json={"employee_id": str(other_customer.id)},
        )
        assert res.status_code == 400

    async def test_assign_unknown_employee(self, client: AsyncClient, admin_token, make_appointment):
        appointment = await make_appointment()
        res = await client.put(
            f"{ADMIN}/appointments/{appointment.id}/assign",
            headers=auth_header(admin_token),
            json={"employee_id": "00000000-0000-0000-0000-000000000000"},
        )
        assert res.status_code == 404

    async def test_assign_completed_appointment(
        self, client: AsyncClient, admin_token, employee_user, make_appointment, outbox
    ):
        """완료된 예약에는 배정 불가, 메일 없음."""
        appointment = await make_appointment(status=AppointmentStatus.COMPLETED)
        res = await client.put(
            f"{ADMIN}/appointments/{appointment.id}/assign",
            headers=auth_header(admin_token),
            json={"employee_id": str(employee_user.id)},
        )
        assert res.status_code == 409
        assert outbox == []

    async def test_assign_cancelled_appointment(
        self, client: AsyncClient, admin_token, employee_user, make_appointment, outbox
    ):
        appointment = await make_appointment(status=AppointmentStatus.CANCELLED)
        res = await client.put(
            f"{ADMIN}/appointments/{appointment.id}/assign",
            headers=auth_header(admin_token),
            json={"employee_id": str(employee_user.id)},
        )
        assert res.status_code == 409
        assert outbox == []

    async def test_reassign_in_progress_appointment(
        self, client: AsyncClient, admin_token, employee_user, other_employee, make_appointment, outbox
    ):
        """작업 중인 예약은 담당 변경 불가, 기존 담당 유지."""
        appointment = await make_appointment(status=AppointmentStatus.IN_PROGRESS, employee=employee_user)
        res = await client.put(
            f"{ADMIN}/appointments/{appointment.id}/reassign",
            headers=auth_header(admin_token),
            json={"employee_id": str(other_employee.id)},
        )
        assert res.status_code == 409
        assert outbox == []
        res = await client.get(f"{ADMIN}/appointments", headers=auth_header(admin_token))
        assert res.json()[0]["employee_id"] == str(employee_user.id)

    async def test_assign_no_show_appointment(
        self, client: AsyncClient, admin_token, employee_user, make_appointment, outbox
    ):
        """노쇼 예약에는 배정 불가, 확인 메일 없음."""
        appointment = await make_appointment(status=AppointmentStatus.NO_SHOW)
        res = await client.put(
            f"{ADMIN}/appointments/{appointment.id}/assign",
            headers=auth_header(admin_token),
            json={"employee_id": str(employee_user.id)},
        )
        assert res.status_code == 409
        assert outbox == []

    async def test_unassign_reverts_to_scheduled(self, client: AsyncClient, admin_token, employee_user, make_appointment):
        appointment = await make_appointment(status=AppointmentStatus.CONFIRMED, employee=employee_user)
        res = await client.delete(
            f"{ADMIN}/appointments/{appointment.id}/unassign", headers=auth_header(admin_token)
        )
        assert res.status_code == 200
        assert res.json()["status"] == "SCHEDULED"
        assert res.json()["employee_id"] is None

    async def test_unassign_in_progress(self, client: AsyncClient, admin_token, employee_user, make_appointment):
        appointment = await make_appointment(status=AppointmentStatus.IN_PROGRESS, employee=employee_user)
        res = await client.delete(
            f"{ADMIN}/appointments/{appointment.id}/unassign", headers=auth_header(admin_token)
        )
        assert res.status_code == 409

    async def test_unassign_without_employee(self, client: AsyncClient, admin_token, make_appointment):
        appointment = await make_appointment()
        res = await client.delete(
            f"{ADMIN}/appointments/{appointment.id}/unassign", headers=auth_header(admin_token)
        )
        assert res.status_code == 400


class TestAppointmentListing:
    """관리자 예약 목록 테스트."""

    async def test_list_filter_and_pending(self, client: AsyncClient, admin_token, employee_user, make_appointment):
        await make_appointment()
        await make_appointment(status=AppointmentStatus.CONFIRMED, employee=employee_user)
        await make_appointment(status=AppointmentStatus.CANCELLED)

        res = await client.get(f"{ADMIN}/appointments", headers=auth_header(admin_token))
        assert len(res.json()) == 3

        res = await client.get(f"{ADMIN}/appointments/filter?status=confirmed", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert [a["status"] for a in res.json()] == ["CONFIRMED"]

        res = await client.get(f"{ADMIN}/appointments/pending", headers=auth_header(admin_token))
        assert [a["status"] for a in res.json()] == ["SCHEDULED"]

    async def test_filter_invalid_status(self, client: AsyncClient, admin_token):
        res = await client.get(f"{ADMIN}/appointments/filter?status=BOGUS", headers=auth_header(admin_token))
        assert res.status_code == 400

    async def test_customer_forbidden(self, client: AsyncClient, customer_token):
        res = await client.get(f"{ADMIN}/appointments", headers=auth_header(customer_token))
        assert res.status_code == 403


# ===== Customers =====

class TestCustomerOverview:
    """고객 조회 테스트."""

    async def test_list_customers(self, client: AsyncClient, admin_token, vehicle, other_customer, make_appointment):
        await make_appointment()
        res = await client.get(f"{ADMIN}/customers", headers=auth_header(admin_token))
        assert res.status_code == 200
        by_email = {c["email"]: c for c in res.json()}
        assert set(by_email) == {"cust@test.com", "other@test.com"}
        assert by_email["cust@test.com"]["vehicle_count"] == 1
        assert by_email["cust@test.com"]["appointment_count"] == 1
        assert by_email["other@test.com"]["vehicle_count"] == 0

    async def test_get_customer(self, client: AsyncClient, admin_token, customer_user, vehicle):
        res = await client.get(f"{ADMIN}/customers/{customer_user.id}", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert [v["registration_number"] for v in res.json()["vehicles"]] == ["ABC123"]

    async def test_get_customer_with_employee_id(self, client: AsyncClient, admin_token, employee_user):
        res = await client.get(f"{ADMIN}/customers/{employee_user.id}", headers=auth_header(admin_token))
        assert res.status_code == 404
