"""Store helpers for users and organizations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from proposalcraft.db.models import Organization as OrganizationDB
from proposalcraft.db.models import User as UserDB


async def insert_user(session: AsyncSession, *, email: str, full_name: str) -> UserDB:
    """Add a user row and flush to obtain its id."""
    user = UserDB(email=email, full_name=full_name)
    session.add(user)
    await session.flush()
    return user


async def get_user(session: AsyncSession, user_id: int) -> UserDB | None:
    """Get user by ID."""
    return await session.get(UserDB, user_id)


async def find_user_by_email(session: AsyncSession, email: str) -> UserDB | None:
    """Get user by email address."""
    result = await session.execute(select(UserDB).where(UserDB.email == email))
    return result.scalar_one_or_none()


async def insert_organization(
    session: AsyncSession,
    *,
    user_id: int,
    name: str,
    description: str | None,
) -> OrganizationDB:
    """Add an organization row and flush to obtain its id."""
    organization = OrganizationDB(user_id=user_id, name=name, description=description)
    session.add(organization)
    await session.flush()
    return organization


async def get_organization(session: AsyncSession, organization_id: int) -> OrganizationDB | None:
    """Get organization by ID."""
    return await session.get(OrganizationDB, organization_id)


async def list_organizations(session: AsyncSession, user_id: int) -> list[OrganizationDB]:
    """List organizations owned by a user, oldest first."""
    result = await session.execute(
        select(OrganizationDB)
        .where(OrganizationDB.user_id == user_id)
        .order_by(OrganizationDB.created_at.asc(), OrganizationDB.id.asc())
    )
    return list(result.scalars().all())
