"""Store helpers for organization documents."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from proposalcraft.db.models import Document as DocumentDB


async def insert_document(
    session: AsyncSession,
    *,
    organization_id: int,
    filename: str,
    file_path: str,
    file_type: str,
    file_size: int,
) -> DocumentDB:
    """Add a document row in pending status."""
    document = DocumentDB(
        organization_id=organization_id,
        filename=filename,
        file_path=file_path,
        file_type=file_type,
        file_size=file_size,
        upload_status="pending",
    )
    session.add(document)
    await session.flush()
    return document


async def list_documents(session: AsyncSession, organization_id: int) -> list[DocumentDB]:
    """List an organization's documents in registration order."""
    result = await session.execute(
        select(DocumentDB)
        .where(DocumentDB.organization_id == organization_id)
        .order_by(DocumentDB.created_at.asc(), DocumentDB.id.asc())
    )
    return list(result.scalars().all())


async def count_documents(session: AsyncSession, organization_id: int) -> int:
    """Count an organization's documents regardless of upload status."""
    result = await session.execute(
        select(func.count())
        .select_from(DocumentDB)
        .where(DocumentDB.organization_id == organization_id)
    )
    return int(result.scalar_one())


async def list_file_paths(session: AsyncSession, organization_id: int) -> set[str]:
    """Storage paths already taken within one organization."""
    result = await session.execute(
        select(DocumentDB.file_path).where(DocumentDB.organization_id == organization_id)
    )
    return set(result.scalars().all())
