"""Store helpers for chat messages and assistant memory."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from proposalcraft.db.models import ChatMessage as ChatMessageDB
from proposalcraft.db.models import MemoryEntry as MemoryEntryDB


async def append_chat_message(
    session: AsyncSession,
    *,
    proposal_id: int,
    role: str,
    content: str,
    message_type: str,
) -> ChatMessageDB:
    """Append a chat message.

    Args:
        session: Database session
        proposal_id: Owning proposal
        role: user or assistant
        content: Message text
        message_type: chat, planning or feedback

    Returns:
        Flushed ORM row with id and created_at populated
    """
    message = ChatMessageDB(
        proposal_id=proposal_id,
        role=role,
        content=content,
        message_type=message_type,
    )
    session.add(message)
    await session.flush()
    return message


async def list_chat_messages(session: AsyncSession, proposal_id: int) -> list[ChatMessageDB]:
    """List all messages for a proposal in creation order."""
    result = await session.execute(
        select(ChatMessageDB)
        .where(ChatMessageDB.proposal_id == proposal_id)
        .order_by(ChatMessageDB.created_at.asc(), ChatMessageDB.id.asc())
    )
    return list(result.scalars().all())


async def list_recent_chat_messages(
    session: AsyncSession, proposal_id: int, limit: int
) -> list[ChatMessageDB]:
    """List the latest ``limit`` messages, returned oldest first."""
    result = await session.execute(
        select(ChatMessageDB)
        .where(ChatMessageDB.proposal_id == proposal_id)
        .order_by(ChatMessageDB.created_at.desc(), ChatMessageDB.id.desc())
        .limit(limit)
    )
    rows = list(result.scalars().all())
    rows.reverse()
    return rows


async def append_memory_entry(
    session: AsyncSession,
    *,
    proposal_id: int,
    memory_type: str,
    content: str,
    source: str | None,
) -> MemoryEntryDB:
    """Append an assistant memory note."""
    entry = MemoryEntryDB(
        proposal_id=proposal_id,
        memory_type=memory_type,
        content=content,
        source=source,
    )
    session.add(entry)
    await session.flush()
    return entry


async def list_memory_entries(
    session: AsyncSession, proposal_id: int, limit: int | None = None
) -> list[MemoryEntryDB]:
    """List memory notes for a proposal, newest first."""
    query = (
        select(MemoryEntryDB)
        .where(MemoryEntryDB.proposal_id == proposal_id)
        .order_by(MemoryEntryDB.created_at.desc(), MemoryEntryDB.id.desc())
    )
    if limit is not None:
        query = query.limit(limit)

    result = await session.execute(query)
    return list(result.scalars().all())
