"""고객 API 라우터 패키지 — 모든 고객용 엔드포인트 통합.

Customer API Router package — Aggregates all customer-facing endpoints
into a single router for inclusion in the FastAPI application.

Included routers:
    - appointments: 예약 (Appointment booking and management)
    - vehicles: 차량 (Vehicle registry)
    - projects: 맞춤 작업 요청 (Custom modification projects)
    - profile: 내 프로필 (My profile)
    - dashboard: 고객 대시보드 (Customer dashboard)
"""

from fastapi import APIRouter

from gearsync.api.customer.appointments import router as appointments_router
from gearsync.api.customer.dashboard import router as dashboard_router
from gearsync.api.customer.profile import router as profile_router
from gearsync.api.customer.projects import router as projects_router
from gearsync.api.customer.vehicles import router as vehicles_router

customer_router: APIRouter = APIRouter()

customer_router.include_router(appointments_router, prefix="/appointments", tags=["Customer Appointments"])
customer_router.include_router(vehicles_router, prefix="/vehicles", tags=["Customer Vehicles"])
customer_router.include_router(projects_router, prefix="/projects", tags=["Customer Projects"])
customer_router.include_router(profile_router, prefix="/profile", tags=["Customer Profile"])
customer_router.include_router(dashboard_router, prefix="/dashboard", tags=["Customer Dashboard"])
