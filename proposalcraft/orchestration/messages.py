"""Plain persistence of chat messages and memory notes (no synthesis)."""

from sqlalchemy.ext.asyncio import AsyncSession

from proposalcraft.db import conversation, proposals
from proposalcraft.errors import NotFoundError
from proposalcraft.models.common import MemoryType, MessageRole, MessageType
from proposalcraft.models.entities import ChatMessage, MemoryEntry


async def ensure_proposal_exists(session: AsyncSession, proposal_id: int) -> None:
    """Raise NotFoundError unless the proposal exists."""
    if await proposals.get_proposal(session, proposal_id) is None:
        raise NotFoundError("Proposal", proposal_id)


async def create_chat_message(
    session: AsyncSession,
    *,
    proposal_id: int,
    role: MessageRole,
    content: str,
    message_type: MessageType = MessageType.chat,
) -> ChatMessage:
    """Persist a chat message without generating a reply.

    Raises:
        NotFoundError: If the proposal does not exist
    """
    await ensure_proposal_exists(session, proposal_id)

    message = await conversation.append_chat_message(
        session,
        proposal_id=proposal_id,
        role=MessageRole(role).value,
        content=content,
        message_type=MessageType(message_type).value,
    )
    await session.commit()

    return ChatMessage.model_validate(message)


async def list_chat_messages(session: AsyncSession, proposal_id: int) -> list[ChatMessage]:
    """List a proposal's messages, oldest first."""
    rows = await conversation.list_chat_messages(session, proposal_id)
    return [ChatMessage.model_validate(row) for row in rows]


async def create_memory_entry(
    session: AsyncSession,
    *,
    proposal_id: int,
    memory_type: MemoryType,
    content: str,
    source: str | None = None,
) -> MemoryEntry:
    """Record an assistant memory note for a proposal.

    Raises:
        NotFoundError: If the proposal does not exist
    """
    await ensure_proposal_exists(session, proposal_id)

    entry = await conversation.append_memory_entry(
        session,
        proposal_id=proposal_id,
        memory_type=MemoryType(memory_type).value,
        content=content,
        source=source,
    )
    await session.commit()

    return MemoryEntry.model_validate(entry)


async def list_memory_entries(session: AsyncSession, proposal_id: int) -> list[MemoryEntry]:
    """List a proposal's memory notes, newest first."""
    rows = await conversation.list_memory_entries(session, proposal_id)
    return [MemoryEntry.model_validate(row) for row in rows]
