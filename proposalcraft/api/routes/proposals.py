"""Proposal endpoints - lifecycle, sections and document assembly."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from proposalcraft.api.auth import get_current_context
from proposalcraft.db.context import RequestContext
from proposalcraft.db.engine import get_session
from proposalcraft.models.assembly import ProposalDocument
from proposalcraft.models.entities import Proposal, ProposalUpdate, Section, SectionUpdate
from proposalcraft.proposals import lifecycle
from proposalcraft.proposals.assembly import assemble_document

router = APIRouter(tags=["proposals"])


class CreateProposalRequest(BaseModel):
    """Request body for POST /proposals."""

    organization_id: int
    title: str = Field(..., min_length=1, max_length=300, description="Proposal title")
    description: str | None = None


class CreateSectionRequest(BaseModel):
    """Request body for POST /proposals/{proposal_id}/sections."""

    title: str = Field(..., min_length=1, max_length=300)
    content: str | None = None
    order_index: int


@router.post("/proposals", response_model=Proposal, status_code=status.HTTP_201_CREATED)
async def create_proposal(
    request: CreateProposalRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> Proposal:
    """Create a proposal for the caller in the planning status and phase."""
    return await lifecycle.create_proposal(
        session,
        user_id=ctx.user_id,
        organization_id=request.organization_id,
        title=request.title,
        description=request.description,
    )


@router.get("/proposals", response_model=list[Proposal])
async def list_proposals(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> list[Proposal]:
    """List the caller's proposals, newest first."""
    return await lifecycle.list_proposals_by_user(session, ctx.user_id)


@router.get(
    "/proposals/{proposal_id}",
    response_model=Proposal,
    dependencies=[Depends(get_current_context)],
)
async def get_proposal(
    proposal_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> Proposal:
    """Get a proposal by ID."""
    return await lifecycle.get_proposal(session, proposal_id)


@router.patch(
    "/proposals/{proposal_id}",
    response_model=Proposal,
    dependencies=[Depends(get_current_context)],
)
async def update_proposal(
    proposal_id: int,
    request: ProposalUpdate,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> Proposal:
    """Partially update a proposal. Omitted fields are left untouched."""
    return await lifecycle.update_proposal(session, proposal_id, request)


@router.post(
    "/proposals/{proposal_id}/sections",
    response_model=Section,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_current_context)],
)
async def create_section(
    proposal_id: int,
    request: CreateSectionRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> Section:
    """Add a section to a proposal."""
    return await lifecycle.create_section(
        session,
        proposal_id=proposal_id,
        title=request.title,
        content=request.content,
        order_index=request.order_index,
    )


@router.get(
    "/proposals/{proposal_id}/sections",
    response_model=list[Section],
    dependencies=[Depends(get_current_context)],
)
async def list_sections(
    proposal_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> list[Section]:
    """List a proposal's sections by order_index."""
    return await lifecycle.list_sections(session, proposal_id)


@router.patch(
    "/sections/{section_id}",
    response_model=Section,
    dependencies=[Depends(get_current_context)],
)
async def update_section(
    section_id: int,
    request: SectionUpdate,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> Section:
    """Partially update a section. Omitted fields are left untouched."""
    return await lifecycle.update_section(session, section_id, request)


@router.get(
    "/proposals/{proposal_id}/document",
    response_model=ProposalDocument,
    dependencies=[Depends(get_current_context)],
)
async def get_proposal_document(
    proposal_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ProposalDocument:
    """Assemble the proposal's completed sections into one document."""
    return await assemble_document(session, proposal_id)
