"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, session, and httpx client fixtures.
Every test gets a fresh schema; outgoing email is captured in an outbox
instead of reaching SMTP.
"""

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from gearsync.database import Base, get_db
from gearsync.main import app
from gearsync.models import *  # noqa: F401,F403 — register all models with metadata
from gearsync.models.appointment import Appointment, AppointmentStatus
from gearsync.models.catalog import Service
from gearsync.models.project import Project, ProjectStatus
from gearsync.models.user import User, UserRole
from gearsync.models.vehicle import Vehicle
from gearsync.utils.clock import utcnow
from gearsync.utils.jwt import create_access_token
from gearsync.utils.password import hash_password

TEST_DATABASE_URL = "sqlite+aiosqlite://"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진 — 테스트마다 새 스키마."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def outbox(monkeypatch) -> list[dict]:
    """발송 메일 수집 — Capture outgoing email instead of calling SMTP."""
    sent: list[dict] = []

    async def _fake_send_email(to: str, subject: str, html: str, text: str | None = None) -> bool:
        sent.append({"to": to, "subject": subject, "html": html, "text": text})
        return True

    monkeypatch.setattr("gearsync.services.email_service.send_email", _fake_send_email)
    return sent


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def _make_user(
    db: AsyncSession,
    email: str,
    role: UserRole,
    password: str,
    first_name: str,
    last_name: str,
    is_active: bool = True,
) -> User:
    user = User(
        email=email,
        first_name=first_name,
        last_name=last_name,
        role=role.value,
        password_hash=hash_password(password),
        is_active=is_active,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def admin_user(db: AsyncSession) -> User:
    """관리자 사용자를 생성합니다."""
    return await _make_user(db, "admin@test.com", UserRole.ADMIN, "admin123!", "Ada", "Admin")


@pytest_asyncio.fixture
async def employee_user(db: AsyncSession) -> User:
    """직원 사용자를 생성합니다."""
    return await _make_user(db, "tech@test.com", UserRole.EMPLOYEE, "tech1234!", "Tom", "Tech")


@pytest_asyncio.fixture
async def other_employee(db: AsyncSession) -> User:
    return await _make_user(db, "tech2@test.com", UserRole.EMPLOYEE, "tech1234!", "Tina", "Wrench")


@pytest_asyncio.fixture
async def inactive_employee(db: AsyncSession) -> User:
    """비활성 직원을 생성합니다."""
    return await _make_user(
        db, "gone@test.com", UserRole.EMPLOYEE, "gone1234!", "Gus", "Gone", is_active=False
    )


@pytest_asyncio.fixture
async def customer_user(db: AsyncSession) -> User:
    """고객 사용자를 생성합니다."""
    return await _make_user(db, "cust@test.com", UserRole.CUSTOMER, "cust1234!", "Cara", "Customer")


@pytest_asyncio.fixture
async def other_customer(db: AsyncSession) -> User:
    return await _make_user(db, "other@test.com", UserRole.CUSTOMER, "other123!", "Owen", "Other")


@pytest_asyncio.fixture
async def vehicle(db: AsyncSession, customer_user: User) -> Vehicle:
    """고객 차량을 생성합니다."""
    v = Vehicle(
        owner_id=customer_user.id,
        registration_number="ABC123",
        make="Toyota",
        model="Corolla",
        year=2020,
    )
    db.add(v)
    await db.flush()
    await db.refresh(v)
    return v


@pytest_asyncio.fixture
async def other_vehicle(db: AsyncSession, other_customer: User) -> Vehicle:
    v = Vehicle(
        owner_id=other_customer.id,
        registration_number="XYZ789",
        make="Honda",
        model="Civic",
        year=2018,
    )
    db.add(v)
    await db.flush()
    await db.refresh(v)
    return v


@pytest_asyncio.fixture
async def service(db: AsyncSession) -> Service:
    """예약 가능한 서비스 — 50.00, 30분."""
    s = Service(
        name="Oil Change",
        base_price=Decimal("50.00"),
        estimated_duration_minutes=30,
        category="MAINTENANCE",
        is_active=True,
    )
    db.add(s)
    await db.flush()
    await db.refresh(s)
    return s


@pytest_asyncio.fixture
async def inactive_service(db: AsyncSession) -> Service:
    s = Service(
        name="Retired Wash",
        base_price=Decimal("15.00"),
        estimated_duration_minutes=20,
        category="OTHER",
        is_active=False,
    )
    db.add(s)
    await db.flush()
    await db.refresh(s)
    return s


@pytest.fixture
def make_appointment(db: AsyncSession, customer_user: User, vehicle: Vehicle, service: Service):
    """예약을 직접 생성하는 팩토리 — Factory inserting appointments in any state."""
    async def _make(
        status: AppointmentStatus = AppointmentStatus.SCHEDULED,
        scheduled: datetime | None = None,
        employee: User | None = None,
        final_cost: Decimal | None = Decimal("50.00"),
    ) -> Appointment:
        appointment = Appointment(
            customer_id=customer_user.id,
            vehicle_id=vehicle.id,
            employee_id=employee.id if employee else None,
            scheduled_date_time=scheduled or utcnow() + timedelta(days=2),
            status=status.value,
            estimated_cost=Decimal("50.00"),
            final_cost=final_cost,
            estimated_duration_minutes=30,
            progress_percentage=0,
        )
        appointment.services = [service]
        db.add(appointment)
        await db.flush()
        await db.refresh(appointment)
        return appointment
    return _make


@pytest.fixture
def make_project(db: AsyncSession, customer_user: User, vehicle: Vehicle):
    """프로젝트를 직접 생성하는 팩토리 — Factory inserting projects in any state."""
    async def _make(
        status: ProjectStatus = ProjectStatus.PENDING,
        employee: User | None = None,
    ) -> Project:
        project = Project(
            customer_id=customer_user.id,
            vehicle_id=vehicle.id,
            employee_id=employee.id if employee else None,
            name="Turbo kit",
            description="Install an aftermarket turbo",
            status=status.value,
            progress_percentage=0,
        )
        db.add(project)
        await db.flush()
        await db.refresh(project)
        return project
    return _make


def make_token(user: User) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token({"sub": str(user.id), "role": user.role})


@pytest.fixture
def admin_token(admin_user) -> str:
    return make_token(admin_user)


@pytest.fixture
def employee_token(employee_user) -> str:
    return make_token(employee_user)


@pytest.fixture
def customer_token(customer_user) -> str:
    return make_token(customer_user)


@pytest.fixture
def other_customer_token(other_customer) -> str:
    return make_token(other_customer)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def tomorrow_at(hour: int) -> str:
    """내일 특정 시각의 ISO 문자열 (Naive UTC ISO string for tomorrow at `hour`:00)."""
    moment = (utcnow() + timedelta(days=1)).replace(hour=hour, minute=0, second=0, microsecond=0)
    return moment.isoformat()
