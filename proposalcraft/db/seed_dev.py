"""Dev seeding helper - demo user, organization and proposal."""

import asyncio

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from proposalcraft.db.engine import get_async_engine
from proposalcraft.db.models import Organization, Proposal, User

DEV_USER_EMAIL = "dev@example.com"
DEV_ORGANIZATION_NAME = "Dev Organization"
DEV_PROPOSAL_TITLE = "Community Water Access Grant"


async def seed_dev_data(engine: AsyncEngine | None = None) -> int:
    """Seed a dev user with one organization and one proposal.

    This function is idempotent - safe to run multiple times.

    Returns:
        The dev user's id (use it as the bearer token)
    """
    async with AsyncSession(engine or get_async_engine(), expire_on_commit=False) as session:
        result = await session.execute(select(User).where(User.email == DEV_USER_EMAIL))
        user = result.scalar_one_or_none()

        if not user:
            print(f"Creating dev user {DEV_USER_EMAIL}...")
            user = User(email=DEV_USER_EMAIL, full_name="Dev User")
            session.add(user)
            await session.flush()
        else:
            print(f"Dev user already exists: id={user.id}")

        result = await session.execute(
            select(Organization).where(
                Organization.user_id == user.id, Organization.name == DEV_ORGANIZATION_NAME
            )
        )
        organization = result.scalar_one_or_none()

        if not organization:
            print(f"Creating dev organization {DEV_ORGANIZATION_NAME!r}...")
            organization = Organization(
                user_id=user.id,
                name=DEV_ORGANIZATION_NAME,
                description="Regional nonprofit used for local development",
            )
            session.add(organization)
            await session.flush()

        result = await session.execute(
            select(Proposal).where(
                Proposal.organization_id == organization.id,
                Proposal.title == DEV_PROPOSAL_TITLE,
            )
        )
        if result.scalar_one_or_none() is None:
            print(f"Creating dev proposal {DEV_PROPOSAL_TITLE!r}...")
            session.add(
                Proposal(
                    user_id=user.id,
                    organization_id=organization.id,
                    title=DEV_PROPOSAL_TITLE,
                    status="planning",
                    phase="planning",
                )
            )

        await session.commit()
        print(f"Dev seeding complete (bearer token: {user.id})")
        return user.id


if __name__ == "__main__":
    asyncio.run(seed_dev_data())
