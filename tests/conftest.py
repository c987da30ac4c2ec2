"""Pytest configuration and fixtures for flowerrate.

Environment is forced to in-memory SQLite (aiosqlite) before app.* is
imported, so HTTP, repository and service tests run without Postgres or
Redis. Each DB-backed test gets a fresh engine and schema; the app's event
bus is rebuilt per test so subscribers use that engine too.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ["REDIS_ENABLED"] = "false"
os.environ["TELEMETRY_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["FLOWER_RATES_REQUIRES_APPROVAL"] = "false"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402

from app.api.v1.dependencies.auth import AuthSecurity, get_auth_security  # noqa: E402
from app.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.infrastructure.messaging import InProcessEventBus  # noqa: E402
from app.infrastructure.persistence.database import (  # noqa: E402
    Base,
    dispose_engine,
    get_engine,
    get_session_factory,
)
from app.infrastructure.persistence.repositories import (  # noqa: E402
    AccountRepository,
    PermissionRepository,
    RoleRepository,
)
from app.infrastructure.security import create_access_token  # noqa: E402
from app.infrastructure.services import (  # noqa: E402
    LogOnlyAccountNotifier,
    register_account_subscribers,
)
from app.main import app  # noqa: E402

# Low bcrypt cost keeps hashing fast in tests.
TEST_BCRYPT_ROUNDS = 4

ADMIN_EMAIL = "admin@flowerrate.test"
ADMIN_PASSWORD = "AdminPassword123!"
SEEDED_ROLES = ("administrator", "member")
SEEDED_PERMISSIONS = ("view backend", "access.flower_rates.manage")


@pytest.fixture
async def session_factory() -> async_sessionmaker[AsyncSession]:
    """Fresh in-memory schema; engine disposed (database dropped) after the test."""
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield get_session_factory()
    await dispose_engine()


@pytest.fixture
async def db_session(session_factory) -> AsyncSession:
    """Database session for repository tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def seeded(session_factory) -> None:
    """Seed roles and permissions used by the account tests."""
    async with session_factory() as session:
        roles = RoleRepository(session)
        permissions = PermissionRepository(session)
        async with roles.transaction("create_error"):
            for name in SEEDED_ROLES:
                await roles.create_role(name)
            for name in SEEDED_PERMISSIONS:
                await permissions.create_permission(name)


@pytest.fixture
async def admin_id(session_factory, seeded) -> int:
    """Primordial administrator (account 1): active and confirmed."""
    hasher = AuthSecurity(rounds=TEST_BCRYPT_ROUNDS)
    async with session_factory() as session:
        accounts = AccountRepository(session)
        role = await RoleRepository(session).get_by_name("administrator")
        assert role is not None
        async with accounts.transaction("create_error"):
            admin = await accounts.create_account(
                first_name="Super",
                last_name="Admin",
                email=ADMIN_EMAIL,
                password_hash=hasher.hash_password(ADMIN_PASSWORD),
                active=True,
                confirmed=True,
                confirmation_code="a" * 32,
                role_ids=[role.id],
                permission_ids=[],
            )
    assert admin.id == 1
    return admin.id


@pytest.fixture
async def client(session_factory) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI), wired to the test database."""
    app.state.event_bus = InProcessEventBus()
    app.state.notifier = LogOnlyAccountNotifier()
    app.state.cache = None
    register_account_subscribers(app.state.event_bus, session_factory)
    app.dependency_overrides[get_auth_security] = lambda: AuthSecurity(
        rounds=TEST_BCRYPT_ROUNDS
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(admin_id: int) -> dict[str, str]:
    """Bearer headers acting as the primordial administrator."""
    return {"Authorization": f"Bearer {create_access_token(admin_id)}"}
