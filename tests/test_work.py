"""직원 업무 API 테스트 — 배정된 예약/프로젝트 진행.

Employee work tests — Assigned appointment and project progress
transitions.
"""

from decimal import Decimal

from httpx import AsyncClient

from gearsync.models.appointment import AppointmentStatus
from gearsync.models.project import ProjectStatus
from tests.conftest import auth_header, make_token

EMPLOYEE = "/api/employee"


class TestAppointmentWork:
    """배정된 예약 진행 테스트."""

    async def test_list_only_assigned(
        self, client: AsyncClient, employee_token, employee_user, other_employee, make_appointment
    ):
        await make_appointment(status=AppointmentStatus.CONFIRMED, employee=employee_user)
        await make_appointment(status=AppointmentStatus.CONFIRMED, employee=other_employee)
        await make_appointment()

        res = await client.get(f"{EMPLOYEE}/appointments", headers=auth_header(employee_token))
        assert res.status_code == 200
        assert [a["employee_id"] for a in res.json()] == [str(employee_user.id)]

    async def test_start_then_complete(self, client: AsyncClient, employee_token, employee_user, make_appointment):
        """CONFIRMED → IN_PROGRESS → COMPLETED."""
        appointment = await make_appointment(status=AppointmentStatus.CONFIRMED, employee=employee_user)
        url = f"{EMPLOYEE}/appointments/{appointment.id}/status"

        res = await client.patch(url, headers=auth_header(employee_token), json={"status": "IN_PROGRESS"})
        assert res.status_code == 200
        assert res.json()["status"] == "IN_PROGRESS"
        assert res.json()["actual_start_time"] is not None

        res = await client.patch(url, headers=auth_header(employee_token), json={
            "progress_percentage": 40,
            "employee_notes": "Drained old oil",
        })
        assert res.status_code == 200
        assert res.json()["progress_percentage"] == 40
        assert res.json()["employee_notes"].endswith("Tom Tech: Drained old oil")

        res = await client.patch(url, headers=auth_header(employee_token), json={"status": "COMPLETED"})
        assert res.status_code == 200
        data = res.json()
        assert data["status"] == "COMPLETED"
        assert data["progress_percentage"] == 100
        assert data["actual_end_time"] is not None

    async def test_mark_no_show(self, client: AsyncClient, employee_token, employee_user, make_appointment):
        appointment = await make_appointment(status=AppointmentStatus.RESCHEDULED, employee=employee_user)
        res = await client.patch(
            f"{EMPLOYEE}/appointments/{appointment.id}/status",
            headers=auth_header(employee_token),
            json={"status": "NO_SHOW"},
        )
        assert res.status_code == 200
        assert res.json()["status"] == "NO_SHOW"

    async def test_cannot_complete_before_start(
        self, client: AsyncClient, employee_token, employee_user, make_appointment
    ):
        appointment = await make_appointment(status=AppointmentStatus.CONFIRMED, employee=employee_user)
        res = await client.patch(
            f"{EMPLOYEE}/appointments/{appointment.id}/status",
            headers=auth_header(employee_token),
            json={"status": "COMPLETED"},
        )
        assert res.status_code == 409

    async def test_progress_requires_in_progress(
        self, client: AsyncClient, employee_token, employee_user, make_appointment
    ):
        appointment = await make_appointment(status=AppointmentStatus.CONFIRMED, employee=employee_user)
        res = await client.patch(
            f"{EMPLOYEE}/appointments/{appointment.id}/status",
            headers=auth_header(employee_token),
            json={"progress_percentage": 10},
        )
        assert res.status_code == 409

    async def test_empty_update(self, client: AsyncClient, employee_token, employee_user, make_appointment):
        appointment = await make_appointment(status=AppointmentStatus.IN_PROGRESS, employee=employee_user)
        res = await client.patch(
            f"{EMPLOYEE}/appointments/{appointment.id}/status", headers=auth_header(employee_token), json={}
        )
        assert res.status_code == 400

    async def test_not_assigned(self, client: AsyncClient, employee_token, other_employee, make_appointment):
        appointment = await make_appointment(status=AppointmentStatus.CONFIRMED, employee=other_employee)
        res = await client.patch(
            f"{EMPLOYEE}/appointments/{appointment.id}/status",
            headers=auth_header(employee_token),
            json={"status": "IN_PROGRESS"},
        )
        assert res.status_code == 403
        res = await client.get(f"{EMPLOYEE}/appointments/{appointment.id}", headers=auth_header(employee_token))
        assert res.status_code == 403

    async def test_admin_can_work_assigned_appointment(
        self, client: AsyncClient, admin_user, make_appointment
    ):
        """관리자도 자신에게 배정된 예약은 진행 가능."""
        appointment = await make_appointment(status=AppointmentStatus.CONFIRMED, employee=admin_user)
        res = await client.patch(
            f"{EMPLOYEE}/appointments/{appointment.id}/status",
            headers=auth_header(make_token(admin_user)),
            json={"status": "IN_PROGRESS"},
        )
        assert res.status_code == 200

    async def test_customer_forbidden(self, client: AsyncClient, customer_token):
        res = await client.get(f"{EMPLOYEE}/appointments", headers=auth_header(customer_token))
        assert res.status_code == 403


class TestProjectWork:
    """배정된 프로젝트 진행 테스트."""

    async def test_project_lifecycle(self, client: AsyncClient, employee_token, employee_user, make_project):
        """APPROVED → IN_PROGRESS → ON_HOLD → IN_PROGRESS → COMPLETED."""
        project = await make_project(status=ProjectStatus.APPROVED, employee=employee_user)
        url = f"{EMPLOYEE}/projects/{project.id}/status"
        headers = auth_header(employee_token)

        res = await client.patch(url, headers=headers, json={"status": "IN_PROGRESS"})
        assert res.status_code == 200
        started = res.json()["start_date"]
        assert started is not None

        res = await client.patch(url, headers=headers, json={"progress_percentage": 60})
        assert res.json()["progress_percentage"] == 60

        res = await client.patch(url, headers=headers, json={"status": "ON_HOLD"})
        assert res.json()["status"] == "ON_HOLD"

        res = await client.patch(url, headers=headers, json={"status": "IN_PROGRESS"})
        assert res.json()["start_date"] == started

        res = await client.patch(url, headers=headers, json={"status": "COMPLETED", "actual_cost": "1350.00"})
        assert res.status_code == 200
        data = res.json()
        assert data["status"] == "COMPLETED"
        assert data["progress_percentage"] == 100
        assert data["completion_date"] is not None
        assert Decimal(str(data["actual_cost"])) == Decimal("1350.00")

    async def test_cannot_start_pending_project(
        self, client: AsyncClient, employee_token, employee_user, make_project
    ):
        project = await make_project(status=ProjectStatus.PENDING, employee=employee_user)
        res = await client.patch(
            f"{EMPLOYEE}/projects/{project.id}/status",
            headers=auth_header(employee_token),
            json={"status": "IN_PROGRESS"},
        )
        assert res.status_code == 409

    async def test_list_assigned_projects(
        self, client: AsyncClient, employee_token, employee_user, other_employee, make_project
    ):
        await make_project(status=ProjectStatus.APPROVED, employee=employee_user)
        await make_project(status=ProjectStatus.APPROVED, employee=other_employee)
        res = await client.get(f"{EMPLOYEE}/projects", headers=auth_header(employee_token))
        assert len(res.json()) == 1

    async def test_project_not_assigned(self, client: AsyncClient, employee_token, other_employee, make_project):
        project = await make_project(status=ProjectStatus.APPROVED, employee=other_employee)
        res = await client.get(f"{EMPLOYEE}/projects/{project.id}", headers=auth_header(employee_token))
        assert res.status_code == 403
