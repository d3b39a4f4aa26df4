"""Entity lifecycle rules for users, organizations, proposals and sections.

Creation checks every referenced parent up front and raises NotFoundError
before anything is inserted. Updates apply only the fields the caller set
and always bump ``updated_at``. Proposal status and phase are two
independent enums with no transition graph.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from proposalcraft.db import accounts, proposals
from proposalcraft.errors import ConflictError, NotFoundError
from proposalcraft.models.entities import (
    Organization,
    Proposal,
    ProposalUpdate,
    Section,
    SectionUpdate,
    User,
)

logger = logging.getLogger(__name__)


async def create_user(session: AsyncSession, *, email: str, full_name: str) -> User:
    """Create a user account.

    Raises:
        ConflictError: If the email is already registered
    """
    if await accounts.find_user_by_email(session, email) is not None:
        raise ConflictError(f"User with email {email} already exists", context={"email": email})

    user = await accounts.insert_user(session, email=email, full_name=full_name)
    await session.commit()

    logger.info(f"[lifecycle] created user id={user.id}")
    return User.model_validate(user)


async def create_organization(
    session: AsyncSession,
    *,
    user_id: int,
    name: str,
    description: str | None = None,
) -> Organization:
    """Create an organization owned by ``user_id``.

    Raises:
        NotFoundError: If the user does not exist
    """
    if await accounts.get_user(session, user_id) is None:
        raise NotFoundError("User", user_id)

    organization = await accounts.insert_organization(
        session, user_id=user_id, name=name, description=description
    )
    await session.commit()

    logger.info(f"[lifecycle] created organization id={organization.id} user_id={user_id}")
    return Organization.model_validate(organization)


async def list_organizations_by_user(session: AsyncSession, user_id: int) -> list[Organization]:
    """List organizations owned by a user."""
    rows = await accounts.list_organizations(session, user_id)
    return [Organization.model_validate(row) for row in rows]


async def create_proposal(
    session: AsyncSession,
    *,
    user_id: int,
    organization_id: int,
    title: str,
    description: str | None = None,
) -> Proposal:
    """Create a proposal in status=planning, phase=planning.

    Raises:
        NotFoundError: If the user or the organization does not exist
    """
    if await accounts.get_user(session, user_id) is None:
        raise NotFoundError("User", user_id)
    if await accounts.get_organization(session, organization_id) is None:
        raise NotFoundError("Organization", organization_id)

    proposal = await proposals.insert_proposal(
        session,
        user_id=user_id,
        organization_id=organization_id,
        title=title,
        description=description,
    )
    await session.commit()

    logger.info(
        f"[lifecycle] created proposal id={proposal.id} "
        f"user_id={user_id} organization_id={organization_id}"
    )
    return Proposal.model_validate(proposal)


async def get_proposal(session: AsyncSession, proposal_id: int) -> Proposal:
    """Get a proposal by ID.

    Raises:
        NotFoundError: If the proposal does not exist
    """
    proposal = await proposals.get_proposal(session, proposal_id)
    if proposal is None:
        raise NotFoundError("Proposal", proposal_id)
    return Proposal.model_validate(proposal)


async def list_proposals_by_user(session: AsyncSession, user_id: int) -> list[Proposal]:
    """List a user's proposals, newest first."""
    rows = await proposals.list_proposals(session, user_id)
    return [Proposal.model_validate(row) for row in rows]


async def update_proposal(
    session: AsyncSession, proposal_id: int, changes: ProposalUpdate
) -> Proposal:
    """Apply a partial update to a proposal.

    Raises:
        NotFoundError: If the proposal does not exist
    """
    proposal = await proposals.get_proposal(session, proposal_id)
    if proposal is None:
        raise NotFoundError("Proposal", proposal_id)

    fields = changes.changes()
    await proposals.apply_changes(session, proposal, fields)
    await session.commit()

    logger.info(f"[lifecycle] updated proposal id={proposal_id} fields={sorted(fields)}")
    return Proposal.model_validate(proposal)


async def create_section(
    session: AsyncSession,
    *,
    proposal_id: int,
    title: str,
    order_index: int,
    content: str | None = None,
) -> Section:
    """Add a section to a proposal. ``order_index`` is not checked for uniqueness.

    Raises:
        NotFoundError: If the proposal does not exist
    """
    if await proposals.get_proposal(session, proposal_id) is None:
        raise NotFoundError("Proposal", proposal_id)

    section = await proposals.insert_section(
        session,
        proposal_id=proposal_id,
        title=title,
        content=content,
        order_index=order_index,
    )
    await session.commit()

    return Section.model_validate(section)


async def list_sections(session: AsyncSession, proposal_id: int) -> list[Section]:
    """List a proposal's sections by order_index ascending."""
    rows = await proposals.list_sections(session, proposal_id)
    return [Section.model_validate(row) for row in rows]


async def update_section(
    session: AsyncSession, section_id: int, changes: SectionUpdate
) -> Section:
    """Apply a partial update to a section.

    Raises:
        NotFoundError: If the section does not exist
    """
    section = await proposals.get_section(session, section_id)
    if section is None:
        raise NotFoundError("Section", section_id)

    fields = changes.changes()
    await proposals.apply_changes(session, section, fields)
    await session.commit()

    logger.info(f"[lifecycle] updated section id={section_id} fields={sorted(fields)}")
    return Section.model_validate(section)
