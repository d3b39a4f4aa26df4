"""Store helpers for proposals and their sections."""

from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from proposalcraft.db.models import Organization as OrganizationDB
from proposalcraft.db.models import Proposal as ProposalDB
from proposalcraft.db.models import Section as SectionDB


async def insert_proposal(
    session: AsyncSession,
    *,
    user_id: int,
    organization_id: int,
    title: str,
    description: str | None,
) -> ProposalDB:
    """Add a proposal row in the initial planning status and phase."""
    proposal = ProposalDB(
        user_id=user_id,
        organization_id=organization_id,
        title=title,
        description=description,
        status="planning",
        phase="planning",
    )
    session.add(proposal)
    await session.flush()
    return proposal


async def get_proposal(session: AsyncSession, proposal_id: int) -> ProposalDB | None:
    """Get proposal by ID."""
    return await session.get(ProposalDB, proposal_id)


async def get_proposal_with_organization(
    session: AsyncSession, proposal_id: int
) -> tuple[ProposalDB, OrganizationDB] | None:
    """Get a proposal joined to its organization.

    Returns:
        (proposal, organization) or None if either side does not resolve
    """
    result = await session.execute(
        select(ProposalDB, OrganizationDB)
        .join(OrganizationDB, ProposalDB.organization_id == OrganizationDB.id)
        .where(ProposalDB.id == proposal_id)
    )
    row = result.one_or_none()
    if row is None:
        return None
    return row[0], row[1]


async def list_proposals(session: AsyncSession, user_id: int) -> list[ProposalDB]:
    """List a user's proposals, newest first."""
    result = await session.execute(
        select(ProposalDB)
        .where(ProposalDB.user_id == user_id)
        .order_by(ProposalDB.created_at.desc(), ProposalDB.id.desc())
    )
    return list(result.scalars().all())


async def apply_changes(
    session: AsyncSession, row: ProposalDB | SectionDB, changes: dict[str, Any]
) -> None:
    """Set the given columns on a row and bump its modification timestamp."""
    for name, value in changes.items():
        setattr(row, name, value)
    row.updated_at = datetime.utcnow()
    await session.flush()


async def insert_section(
    session: AsyncSession,
    *,
    proposal_id: int,
    title: str,
    content: str | None,
    order_index: int,
) -> SectionDB:
    """Add a section row (not completed)."""
    section = SectionDB(
        proposal_id=proposal_id,
        title=title,
        content=content,
        order_index=order_index,
        is_completed=False,
    )
    session.add(section)
    await session.flush()
    return section


async def get_section(session: AsyncSession, section_id: int) -> SectionDB | None:
    """Get section by ID."""
    return await session.get(SectionDB, section_id)


async def list_sections(
    session: AsyncSession, proposal_id: int, *, completed_only: bool = False
) -> list[SectionDB]:
    """List a proposal's sections ordered by order_index ascending.

    Duplicate order_index values fall back to creation order.
    """
    query = select(SectionDB).where(SectionDB.proposal_id == proposal_id)
    if completed_only:
        query = query.where(SectionDB.is_completed.is_(True))
    query = query.order_by(SectionDB.order_index.asc(), SectionDB.id.asc())

    result = await session.execute(query)
    return list(result.scalars().all())
