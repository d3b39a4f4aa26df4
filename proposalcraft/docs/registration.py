"""Document registration - validate the organization and record a pending document."""

import logging
from pathlib import PurePosixPath

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from proposalcraft.db import accounts, documents
from proposalcraft.errors import ConflictError, NotFoundError
from proposalcraft.models.common import FileType
from proposalcraft.models.entities import Document
from proposalcraft.utils.metrics import metrics

logger = logging.getLogger(__name__)


def storage_path(upload_root: str, organization_id: int, filename: str, version: int = 1) -> str:
    """Derive the storage path for a document.

    Version 1 keeps the filename as-is; later versions get a ``-v<n>`` suffix
    on the stem.

    Args:
        upload_root: Root directory for uploads
        organization_id: Owning organization
        filename: Client-supplied filename
        version: 1-based version number

    Returns:
        POSIX path string
    """
    name = filename
    if version > 1:
        pure = PurePosixPath(filename)
        name = f"{pure.stem}-v{version}{pure.suffix}"

    return str(PurePosixPath(upload_root) / f"org_{organization_id}" / name)


async def register_document(
    session: AsyncSession,
    *,
    organization_id: int,
    filename: str,
    file_type: FileType,
    file_size: int,
    upload_root: str,
) -> Document:
    """Register a document for an organization in ``pending`` status.

    Content analysis that moves the document to processing/completed/failed
    happens outside this service. Type and size policy is enforced at the
    HTTP boundary, not here. The storage path is the lowest unused version of
    the filename within the organization, so paths never collide.

    Args:
        session: Database session
        organization_id: Owning organization
        filename: Client-supplied filename
        file_type: pdf, docx or doc
        file_size: Size in bytes
        upload_root: Root directory for derived storage paths

    Returns:
        Created Document

    Raises:
        NotFoundError: If the organization does not exist (nothing is written)
        ConflictError: If a concurrent registration took the same path first
    """
    if await accounts.get_organization(session, organization_id) is None:
        raise NotFoundError("Organization", organization_id)

    taken = await documents.list_file_paths(session, organization_id)
    version = 1
    file_path = storage_path(upload_root, organization_id, filename)
    while file_path in taken:
        version += 1
        file_path = storage_path(upload_root, organization_id, filename, version=version)

    try:
        document = await documents.insert_document(
            session,
            organization_id=organization_id,
            filename=filename,
            file_path=file_path,
            file_type=FileType(file_type).value,
            file_size=file_size,
        )
        await session.commit()
    except IntegrityError as exc:
        # A concurrent registration claimed the same path first
        await session.rollback()
        logger.warning(
            f"[register_document] path already taken: organization_id={organization_id} "
            f"path={file_path}"
        )
        raise ConflictError(
            f"Storage path {file_path} is already registered",
            context={"organization_id": organization_id, "file_path": file_path},
        ) from exc

    metrics.inc_document_registered(FileType(file_type).value)
    logger.info(
        f"[register_document] organization_id={organization_id} "
        f"document_id={document.id} path={file_path}"
    )
    if version > 1:
        logger.info(f"[register_document] filename {filename!r} stored as version {version}")

    return Document.model_validate(document)


async def list_documents_by_organization(
    session: AsyncSession, organization_id: int
) -> list[Document]:
    """List an organization's documents in registration order."""
    rows = await documents.list_documents(session, organization_id)
    return [Document.model_validate(row) for row in rows]
