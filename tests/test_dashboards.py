"""대시보드 API 테스트 — 관리자, 직원, 고객 집계.

Dashboard tests — admin, employee and customer aggregates.
"""

from datetime import timedelta
from decimal import Decimal

from httpx import AsyncClient

from gearsync.models.appointment import AppointmentStatus
from gearsync.utils.clock import day_bounds, utcnow
from tests.conftest import auth_header

ADMIN = "/api/admin/dashboard"
EMPLOYEE = "/api/employee/dashboard"
CUSTOMER = "/api/customer/dashboard"


class TestAdminDashboard:
    """관리자 대시보드 테스트."""

    async def test_counts(
        self, client: AsyncClient, admin_token, employee_user, customer_user, vehicle, service,
        inactive_service, make_appointment,
    ):
        await make_appointment()
        await make_appointment(status=AppointmentStatus.IN_PROGRESS, employee=employee_user)
        headers = auth_header(admin_token)

        assert (await client.get(f"{ADMIN}/user/count", headers=headers)).json()["count"] == 3
        assert (await client.get(f"{ADMIN}/appointment/count", headers=headers)).json()["count"] == 2
        assert (await client.get(f"{ADMIN}/vehicle/count", headers=headers)).json()["count"] == 1
        assert (await client.get(f"{ADMIN}/services/active/count", headers=headers)).json()["count"] == 1
        res = await client.get(f"{ADMIN}/appointments/in-progress/count", headers=headers)
        assert res.json()["count"] == 1

    async def test_total_earnings_only_completed(self, client: AsyncClient, admin_token, make_appointment):
        """완료된 예약의 최종 비용만 합산."""
        await make_appointment(status=AppointmentStatus.COMPLETED, final_cost=Decimal("120.25"))
        await make_appointment(status=AppointmentStatus.COMPLETED, final_cost=Decimal("79.75"))
        await make_appointment(status=AppointmentStatus.CONFIRMED, final_cost=Decimal("999.00"))

        res = await client.get(f"{ADMIN}/earnings/total", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert Decimal(str(res.json()["amount"])) == Decimal("200.00")

    async def test_total_earnings_empty(self, client: AsyncClient, admin_token):
        res = await client.get(f"{ADMIN}/earnings/total", headers=auth_header(admin_token))
        assert Decimal(str(res.json()["amount"])) == Decimal("0")

    async def test_confirmed_and_today(self, client: AsyncClient, admin_token, employee_user, make_appointment):
        start, _ = day_bounds(utcnow())
        today = await make_appointment(scheduled=start + timedelta(minutes=1))
        confirmed = await make_appointment(
            status=AppointmentStatus.CONFIRMED, scheduled=start + timedelta(days=1, hours=9), employee=employee_user
        )
        headers = auth_header(admin_token)

        res = await client.get(f"{ADMIN}/appointments/today", headers=headers)
        assert [a["id"] for a in res.json()] == [str(today.id)]

        res = await client.get(f"{ADMIN}/appointments/confirmed", headers=headers)
        assert [a["id"] for a in res.json()] == [str(confirmed.id)]

    async def test_requires_admin(self, client: AsyncClient, employee_token):
        res = await client.get(f"{ADMIN}/user/count", headers=auth_header(employee_token))
        assert res.status_code == 403


class TestEmployeeDashboard:
    """직원 대시보드 테스트."""

    async def test_counts(self, client: AsyncClient, employee_token, employee_user, other_employee, make_appointment):
        await make_appointment(status=AppointmentStatus.CONFIRMED, employee=employee_user)
        await make_appointment(status=AppointmentStatus.IN_PROGRESS, employee=employee_user)
        await make_appointment(status=AppointmentStatus.COMPLETED, employee=employee_user)
        await make_appointment(status=AppointmentStatus.COMPLETED, employee=other_employee)
        headers = auth_header(employee_token)

        assert (await client.get(f"{EMPLOYEE}/assigned/appointment/count", headers=headers)).json()["count"] == 3
        assert (await client.get(f"{EMPLOYEE}/completed/appointment/count", headers=headers)).json()["count"] == 1
        assert (await client.get(f"{EMPLOYEE}/ongoing/appointment/count", headers=headers)).json()["count"] == 1


class TestCustomerDashboard:
    """고객 대시보드 테스트."""

    async def test_counts_and_spent(self, client: AsyncClient, customer_token, employee_user, vehicle, make_appointment):
        await make_appointment()
        await make_appointment(status=AppointmentStatus.IN_PROGRESS, employee=employee_user)
        await make_appointment(status=AppointmentStatus.COMPLETED, final_cost=Decimal("80.00"))
        await make_appointment(status=AppointmentStatus.CANCELLED)
        headers = auth_header(customer_token)

        assert (await client.get(f"{CUSTOMER}/appointment/count", headers=headers)).json()["count"] == 4
        assert (await client.get(f"{CUSTOMER}/appointments/active/count", headers=headers)).json()["count"] == 2
        assert (await client.get(f"{CUSTOMER}/services/completed/count", headers=headers)).json()["count"] == 1
        assert (await client.get(f"{CUSTOMER}/vehicles/count", headers=headers)).json()["count"] == 1
        res = await client.get(f"{CUSTOMER}/spent/total", headers=headers)
        assert Decimal(str(res.json()["amount"])) == Decimal("80.00")

    async def test_upcoming(self, client: AsyncClient, customer_token, make_appointment):
        """미래 일정이면서 SCHEDULED/CONFIRMED/RESCHEDULED인 예약만, 가까운 순."""
        now = utcnow()
        later = await make_appointment(scheduled=now + timedelta(days=5))
        sooner = await make_appointment(status=AppointmentStatus.RESCHEDULED, scheduled=now + timedelta(days=1))
        await make_appointment(status=AppointmentStatus.CANCELLED, scheduled=now + timedelta(days=2))
        await make_appointment(scheduled=now - timedelta(days=1))

        res = await client.get(f"{CUSTOMER}/appointments/upcoming", headers=auth_header(customer_token))
        assert [a["id"] for a in res.json()] == [str(sooner.id), str(later.id)]

    async def test_other_customers_data_not_counted(
        self, client: AsyncClient, other_customer_token, make_appointment
    ):
        await make_appointment(status=AppointmentStatus.COMPLETED)
        res = await client.get(f"{CUSTOMER}/appointment/count", headers=auth_header(other_customer_token))
        assert res.json()["count"] == 0
