"""Document endpoints - registration and listing per organization."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from proposalcraft.api.auth import get_current_context
from proposalcraft.config import Settings, get_settings
from proposalcraft.db.engine import get_session
from proposalcraft.docs.registration import list_documents_by_organization, register_document
from proposalcraft.models.common import FileType
from proposalcraft.models.entities import Document

router = APIRouter(
    prefix="/organizations/{organization_id}/documents",
    tags=["documents"],
    dependencies=[Depends(get_current_context)],
)


class RegisterDocumentRequest(BaseModel):
    """Request body for POST /organizations/{organization_id}/documents."""

    filename: str = Field(..., min_length=1, max_length=255, pattern=r"^[^/\\]+$")
    file_type: FileType
    file_size: int = Field(..., ge=0, description="Size in bytes")


@router.post("", response_model=Document, status_code=status.HTTP_201_CREATED)
async def create_document(
    organization_id: int,
    request: RegisterDocumentRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Document:
    """Register a document in pending status.

    Rejects files above the configured size limit before touching the store.
    """
    if request.file_size > settings.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds {settings.max_upload_bytes} bytes",
        )

    return await register_document(
        session,
        organization_id=organization_id,
        filename=request.filename,
        file_type=request.file_type,
        file_size=request.file_size,
        upload_root=settings.upload_root,
    )


@router.get("", response_model=list[Document])
async def list_documents(
    organization_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> list[Document]:
    """List an organization's documents."""
    return await list_documents_by_organization(session, organization_id)
