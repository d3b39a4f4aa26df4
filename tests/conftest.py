"""Shared pytest fixtures for all test suites."""

from collections.abc import AsyncGenerator
from pathlib import Path

import httpx
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool

from proposalcraft.db.engine import enable_sqlite_foreign_keys, get_session
from proposalcraft.db.models import Base
from proposalcraft.main import app
from proposalcraft.proposals import lifecycle
from tests.seed import SeedData


@pytest_asyncio.fixture
async def test_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Create a file-backed SQLite engine with the full schema."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
        echo=False,
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create async session bound to the test engine."""
    async with AsyncSession(test_engine, expire_on_commit=False) as session:
        yield session


@pytest_asyncio.fixture
async def seeded(session: AsyncSession) -> SeedData:
    """Create a user, an organization and a proposal titled "Water Access Grant"."""
    user = await lifecycle.create_user(session, email="ana@example.com", full_name="Ana Ruiz")
    organization = await lifecycle.create_organization(
        session,
        user_id=user.id,
        name="Clean Water Collective",
        description="Rural water infrastructure nonprofit",
    )
    proposal = await lifecycle.create_proposal(
        session,
        user_id=user.id,
        organization_id=organization.id,
        title="Water Access Grant",
        description="Wells for three villages",
    )
    return SeedData(user=user, organization=organization, proposal=proposal)


@pytest_asyncio.fixture
async def client(test_engine: AsyncEngine) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client against the app with sessions bound to the test engine."""

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with AsyncSession(test_engine, expire_on_commit=False) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
