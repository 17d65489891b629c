"""직원 API 라우터 패키지 — 모든 직원용 엔드포인트 통합.

Employee API Router package — Aggregates all employee-facing endpoints
into a single router for inclusion in the FastAPI application.

Included routers:
    - work: 배정 작업 조회 및 진행 보고 (Assigned work and progress)
    - timelogs: 작업 시간 기록 (Time logging)
    - dashboard: 직원 대시보드 (Employee dashboard)
"""

from fastapi import APIRouter

from gearsync.api.employee.dashboard import router as dashboard_router
from gearsync.api.employee.timelogs import router as timelogs_router
from gearsync.api.employee.work import router as work_router

employee_router: APIRouter = APIRouter()

# 배정 작업: /appointments, /projects 하위 (Assigned work)
employee_router.include_router(work_router, tags=["Employee Work"])
employee_router.include_router(timelogs_router, prefix="/timelogs", tags=["Employee Time Logs"])
employee_router.include_router(dashboard_router, prefix="/dashboard", tags=["Employee Dashboard"])
