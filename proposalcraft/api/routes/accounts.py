"""Account endpoints - users and organizations."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from proposalcraft.api.auth import get_current_context
from proposalcraft.db.context import RequestContext
from proposalcraft.db.engine import get_session
from proposalcraft.models.entities import Organization, User
from proposalcraft.proposals import lifecycle

router = APIRouter(tags=["accounts"])


class CreateUserRequest(BaseModel):
    """Request body for POST /users."""

    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", description="Email address")
    full_name: str = Field(..., min_length=1, max_length=200)


class CreateOrganizationRequest(BaseModel):
    """Request body for POST /organizations."""

    name: str = Field(..., min_length=1, max_length=200, description="Organization name")
    description: str | None = None


@router.post("/users", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUserRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> User:
    """Create a user account."""
    return await lifecycle.create_user(
        session, email=request.email, full_name=request.full_name
    )


@router.post("/organizations", response_model=Organization, status_code=status.HTTP_201_CREATED)
async def create_organization(
    request: CreateOrganizationRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> Organization:
    """Create an organization owned by the caller."""
    return await lifecycle.create_organization(
        session, user_id=ctx.user_id, name=request.name, description=request.description
    )


@router.get("/organizations", response_model=list[Organization])
async def list_organizations(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> list[Organization]:
    """List the caller's organizations."""
    return await lifecycle.list_organizations_by_user(session, ctx.user_id)
