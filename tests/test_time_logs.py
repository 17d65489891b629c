"""작업 시간 기록 API 테스트.

Time log tests — Target rules, time window rules, ownership and
duration computation.
"""

from datetime import timedelta

import pytest
import pytest_asyncio
from httpx import AsyncClient

from gearsync.models.appointment import AppointmentStatus
from gearsync.models.project import ProjectStatus
from gearsync.utils.clock import utcnow
from tests.conftest import auth_header, make_token

TIMELOGS = "/api/employee/timelogs"


@pytest.fixture
def now():
    return utcnow().replace(microsecond=0)


@pytest_asyncio.fixture
async def started_appointment(make_appointment, employee_user, now):
    """3시간 전에 시작된 배정 예약 (Assigned appointment scheduled three hours ago)."""
    return await make_appointment(
        status=AppointmentStatus.IN_PROGRESS,
        scheduled=now - timedelta(hours=3),
        employee=employee_user,
    )


def _interval(now, start_hours_ago: float, end_hours_ago: float) -> dict:
    return {
        "start_time": (now - timedelta(hours=start_hours_ago)).isoformat(),
        "end_time": (now - timedelta(hours=end_hours_ago)).isoformat(),
    }


class TestCreateTimeLog:
    """작업 시간 기록 생성 테스트."""

    async def test_log_time_on_appointment(self, client: AsyncClient, employee_token, started_appointment, now):
        res = await client.post(TIMELOGS, headers=auth_header(employee_token), json={
            "appointment_id": str(started_appointment.id),
            **_interval(now, 2, 0.5),
            "work_description": "Oil and filter swap",
        })
        assert res.status_code == 201
        data = res.json()
        assert data["duration_minutes"] == 90
        assert data["appointment_id"] == str(started_appointment.id)
        assert data["project_id"] is None
        assert data["employee_name"] == "Tom Tech"

    async def test_duration_is_truncated_to_whole_minutes(
        self, client: AsyncClient, employee_token, started_appointment, now
    ):
        res = await client.post(TIMELOGS, headers=auth_header(employee_token), json={
            "appointment_id": str(started_appointment.id),
            "start_time": (now - timedelta(minutes=50, seconds=59)).isoformat(),
            "end_time": (now - timedelta(minutes=10)).isoformat(),
            "work_description": "Diagnostics",
        })
        assert res.status_code == 201
        assert res.json()["duration_minutes"] == 40

    async def test_log_time_on_project(self, client: AsyncClient, employee_token, employee_user, make_project, now):
        project = await make_project(status=ProjectStatus.IN_PROGRESS, employee=employee_user)
        res = await client.post(TIMELOGS, headers=auth_header(employee_token), json={
            "project_id": str(project.id),
            **_interval(now, 4, 1),
            "work_description": "Fabricated intake pipe",
        })
        assert res.status_code == 201
        assert res.json()["duration_minutes"] == 180
        assert res.json()["project_id"] == str(project.id)

    async def test_both_targets(self, client: AsyncClient, employee_token, employee_user, started_appointment, make_project, now):
        project = await make_project(status=ProjectStatus.IN_PROGRESS, employee=employee_user)
        res = await client.post(TIMELOGS, headers=auth_header(employee_token), json={
            "appointment_id": str(started_appointment.id),
            "project_id": str(project.id),
            **_interval(now, 2, 1),
            "work_description": "Both",
        })
        assert res.status_code == 400

    async def test_no_target(self, client: AsyncClient, employee_token, now):
        res = await client.post(TIMELOGS, headers=auth_header(employee_token), json={
            **_interval(now, 2, 1),
            "work_description": "Nothing",
        })
        assert res.status_code == 400

    async def test_end_before_start(self, client: AsyncClient, employee_token, started_appointment, now):
        res = await client.post(TIMELOGS, headers=auth_header(employee_token), json={
            "appointment_id": str(started_appointment.id),
            **_interval(now, 1, 2),
            "work_description": "Backwards",
        })
        assert res.status_code == 400
        assert res.json()["detail"] == "End time must be after start time"

    async def test_end_before_start_for_admin(self, client: AsyncClient, admin_user, make_appointment, now):
        """관리자도 종료가 시작보다 앞서면 거부."""
        appointment = await make_appointment(
            status=AppointmentStatus.IN_PROGRESS, scheduled=now - timedelta(hours=3), employee=admin_user
        )
        res = await client.post(TIMELOGS, headers=auth_header(make_token(admin_user)), json={
            "appointment_id": str(appointment.id),
            **_interval(now, 1, 2),
            "work_description": "Backwards",
        })
        assert res.status_code == 400
        assert res.json()["detail"] == "End time must be after start time"

    async def test_end_in_future(self, client: AsyncClient, employee_token, started_appointment, now):
        res = await client.post(TIMELOGS, headers=auth_header(employee_token), json={
            "appointment_id": str(started_appointment.id),
            **_interval(now, 1, -1),
            "work_description": "Time travel",
        })
        assert res.status_code == 400
        assert res.json()["detail"] == "End time cannot be in the future"

    async def test_before_appointment_started(self, client: AsyncClient, employee_token, started_appointment, now):
        """예약 일시 이전 시작은 거부."""
        res = await client.post(TIMELOGS, headers=auth_header(employee_token), json={
            "appointment_id": str(started_appointment.id),
            **_interval(now, 4, 2),
            "work_description": "Too early",
        })
        assert res.status_code == 400

    async def test_not_assigned(self, client: AsyncClient, other_employee, started_appointment, now):
        res = await client.post(TIMELOGS, headers=auth_header(make_token(other_employee)), json={
            "appointment_id": str(started_appointment.id),
            **_interval(now, 2, 1),
            "work_description": "Not mine",
        })
        assert res.status_code == 403

    async def test_unknown_appointment(self, client: AsyncClient, employee_token, now):
        res = await client.post(TIMELOGS, headers=auth_header(employee_token), json={
            "appointment_id": "00000000-0000-0000-0000-000000000000",
            **_interval(now, 2, 1),
            "work_description": "Ghost",
        })
        assert res.status_code == 404

    async def test_customer_cannot_log(self, client: AsyncClient, customer_token, started_appointment, now):
        res = await client.post(TIMELOGS, headers=auth_header(customer_token), json={
            "appointment_id": str(started_appointment.id),
            **_interval(now, 2, 1),
            "work_description": "Nope",
        })
        assert res.status_code == 403


class TestManageTimeLogs:
    """작업 시간 조회/수정/삭제 테스트."""

    async def _create(self, client, token, appointment, now) -> dict:
        res = await client.post(TIMELOGS, headers=auth_header(token), json={
            "appointment_id": str(appointment.id),
            **_interval(now, 2, 1),
            "work_description": "Initial inspection",
        })
        assert res.status_code == 201
        return res.json()

    async def test_list_mine_and_by_appointment(self, client: AsyncClient, employee_token, started_appointment, now):
        log = await self._create(client, employee_token, started_appointment, now)

        res = await client.get(TIMELOGS, headers=auth_header(employee_token))
        assert [item["id"] for item in res.json()] == [log["id"]]

        res = await client.get(
            f"{TIMELOGS}/appointment/{started_appointment.id}", headers=auth_header(employee_token)
        )
        assert res.status_code == 200
        assert len(res.json()) == 1

    async def test_update_recomputes_duration(self, client: AsyncClient, employee_token, started_appointment, now):
        log = await self._create(client, employee_token, started_appointment, now)
        res = await client.put(f"{TIMELOGS}/{log['id']}", headers=auth_header(employee_token), json={
            "end_time": (now - timedelta(minutes=15)).isoformat(),
            "notes": "Ran long",
        })
        assert res.status_code == 200
        assert res.json()["duration_minutes"] == 105
        assert res.json()["notes"] == "Ran long"

    async def test_update_into_future(self, client: AsyncClient, employee_token, started_appointment, now):
        log = await self._create(client, employee_token, started_appointment, now)
        res = await client.put(f"{TIMELOGS}/{log['id']}", headers=auth_header(employee_token), json={
            "end_time": (now + timedelta(hours=1)).isoformat(),
        })
        assert res.status_code == 400

    async def test_update_end_before_start(self, client: AsyncClient, employee_token, started_appointment, now):
        log = await self._create(client, employee_token, started_appointment, now)
        res = await client.put(f"{TIMELOGS}/{log['id']}", headers=auth_header(employee_token), json={
            "end_time": (now - timedelta(hours=2, minutes=30)).isoformat(),
        })
        assert res.status_code == 400
        assert res.json()["detail"] == "End time must be after start time"

    async def test_other_employee_cannot_modify(
        self, client: AsyncClient, employee_token, other_employee, started_appointment, now
    ):
        log = await self._create(client, employee_token, started_appointment, now)
        other = auth_header(make_token(other_employee))
        res = await client.put(f"{TIMELOGS}/{log['id']}", headers=other, json={"notes": "mine now"})
        assert res.status_code == 403
        res = await client.delete(f"{TIMELOGS}/{log['id']}", headers=other)
        assert res.status_code == 403

    async def test_delete(self, client: AsyncClient, employee_token, started_appointment, now):
        log = await self._create(client, employee_token, started_appointment, now)
        res = await client.delete(f"{TIMELOGS}/{log['id']}", headers=auth_header(employee_token))
        assert res.status_code == 204
        res = await client.get(TIMELOGS, headers=auth_header(employee_token))
        assert res.json() == []
