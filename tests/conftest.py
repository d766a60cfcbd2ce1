"""
Test configuration for pytest
"""

import os
import uuid
from typing import AsyncIterator, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel.ext.asyncio.session import AsyncSession

# Test environment variables
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["IDENTITY_JWT_SECRET"] = "test-identity-secret"
os.environ["STRICT_STATUS_TRANSITIONS"] = "false"

from servicetracker.core.config import Settings
from servicetracker.core.database import build_engine, build_session_factory, init_db
from servicetracker.core.identity import JWTIdentityVerifier, create_identity_token
from servicetracker.main import create_app
from servicetracker.models import Business, User, UserRole

TEST_JWT_SECRET = "test-identity-secret"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        IDENTITY_JWT_SECRET=TEST_JWT_SECRET,
        STRICT_STATUS_TRANSITIONS=False,
    )


@pytest_asyncio.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """Fresh in-memory database per test"""
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncIterator[AsyncSession]:
    """Create a clean database session for each test"""
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_tenant(session: AsyncSession) -> Callable:
    """Insert a business with one admin user; returns their ids"""

    async def _make_tenant(name: str = "Acme Plumbing") -> tuple[uuid.UUID, uuid.UUID]:
        business = Business(name=name, subdomain=f"tenant-{uuid.uuid4().hex[:12]}")
        session.add(business)
        await session.flush()

        user = User(
            id=uuid.uuid4(),
            business_id=business.id,
            email=f"admin-{uuid.uuid4().hex[:8]}@example.com",
            name=f"{name} Admin",
            role=UserRole.ADMIN,
        )
        session.add(user)
        business_id, user_id = business.id, user.id
        await session.commit()
        return business_id, user_id

    return _make_tenant


@pytest.fixture
def app(settings, engine):
    return create_app(
        settings=settings,
        engine=engine,
        verifier=JWTIdentityVerifier.from_settings(settings),
    )


@pytest_asyncio.fixture
async def client(app) -> AsyncIterator[AsyncClient]:
    # Unhandled errors must come back as 500 responses, not propagate into the test
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers() -> Callable:
    """Build an Authorization header for a provider-style identity token"""

    def _auth_headers(user_id: uuid.UUID, email: str, full_name: str = None) -> dict:
        token = create_identity_token(
            user_id=user_id,
            email=email,
            secret=TEST_JWT_SECRET,
            full_name=full_name,
        )
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def onboard(client: AsyncClient, auth_headers: Callable) -> Callable:
    """Sign up a new identity and create its business through the API"""

    async def _onboard(business_name: str = "Acme", email: str = None) -> tuple[dict, dict]:
        user_id = uuid.uuid4()
        email = email or f"owner-{user_id.hex[:8]}@example.com"
        headers = auth_headers(user_id, email, full_name="Pat Owner")

        response = await client.post(
            "/api/user/business",
            json={"businessName": business_name},
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return headers, response.json()

    return _onboard
