"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어 및 라우터 등록.

FastAPI application entry point — Middleware and router registration.
Configures Axiom logging, CORS, the fallback error handler, health check,
and includes the routers for each audience (admin, customer, employee).
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gearsync.config import settings
from gearsync.middleware.axiom_logging import AxiomLoggingMiddleware

logger = logging.getLogger(__name__)

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Axiom API 로깅 미들웨어 — Axiom API request/response logging
# CORS보다 먼저 등록하여 모든 요청을 캡처 (Registered before CORS to capture all requests)
app.add_middleware(AxiomLoggingMiddleware)

# CORS 미들웨어 — Allowed origins come from settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """예상치 못한 예외 — 500 응답.

    Fallback for unexpected errors. The request session has already been
    rolled back by `get_db`.
    """
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# 라우터 등록 — Router registration
# ---------------------------------------------------------------------------
from gearsync.api.auth import router as auth_router  # noqa: E402
from gearsync.api.catalog import router as catalog_router  # noqa: E402
from gearsync.api.admin import admin_router  # noqa: E402
from gearsync.api.customer import customer_router  # noqa: E402
from gearsync.api.employee import employee_router  # noqa: E402

app.include_router(auth_router, prefix="/api/auth", tags=["Auth"])
app.include_router(catalog_router, prefix="/api/service/view", tags=["Service Catalog"])
app.include_router(admin_router, prefix="/api/admin")
app.include_router(customer_router, prefix="/api/customer")
app.include_router(employee_router, prefix="/api/employee")
