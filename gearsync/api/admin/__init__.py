"""관리자 API 라우터 패키지 — 모든 관리자 엔드포인트 통합.

Admin API Router package — Aggregates all admin-facing endpoints
into a single router for inclusion in the FastAPI application.

Included routers:
    - staff: 직원/관리자 계정 관리 (Employee and admin accounts)
    - appointments: 예약 조회 및 배정 (Appointment review and assignment)
    - projects: 프로젝트 승인/반려/배정 (Project review and assignment)
    - customers: 고객 및 차량 조회 (Customer and vehicle lookup)
    - services: 서비스 카탈로그 관리 (Service catalog management)
    - dashboard: 관리자 대시보드 (Admin dashboard aggregates)
"""

from fastapi import APIRouter

from gearsync.api.admin.appointments import router as appointments_router
from gearsync.api.admin.customers import router as customers_router
from gearsync.api.admin.dashboard import router as dashboard_router
from gearsync.api.admin.projects import router as projects_router
from gearsync.api.admin.services import router as services_router
from gearsync.api.admin.staff import router as staff_router

admin_router: APIRouter = APIRouter()

# 직원 계정: /employees, /admins 하위 (Staff accounts)
admin_router.include_router(staff_router, tags=["Admin Staff"])
admin_router.include_router(appointments_router, prefix="/appointments", tags=["Admin Appointments"])
admin_router.include_router(projects_router, prefix="/projects", tags=["Admin Projects"])
# 고객/차량: /customers, /vehicles 하위 (Customer and vehicle lookup)
admin_router.include_router(customers_router, tags=["Admin Customers"])
admin_router.include_router(services_router, prefix="/services", tags=["Admin Services"])
admin_router.include_router(dashboard_router, prefix="/dashboard", tags=["Admin Dashboard"])
