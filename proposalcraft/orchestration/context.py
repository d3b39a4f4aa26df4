"""Context assembly - gathers what a reply needs before synthesis."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from proposalcraft.db import conversation, documents, proposals
from proposalcraft.errors import NotFoundError
from proposalcraft.models.context import ConversationContext
from proposalcraft.models.entities import ChatMessage, MemoryEntry

logger = logging.getLogger(__name__)


async def assemble_context(
    session: AsyncSession,
    proposal_id: int,
    *,
    message_limit: int = 5,
    memory_limit: int = 10,
) -> ConversationContext:
    """Assemble the conversation context for a proposal.

    Reads are not isolated from concurrent writers; a turn running at the
    same time on the same proposal may or may not be visible.

    Args:
        session: Database session
        proposal_id: Proposal the conversation belongs to
        message_limit: Maximum number of recent messages
        memory_limit: Maximum number of recent memory notes

    Returns:
        ConversationContext with messages oldest-first and memory newest-first

    Raises:
        NotFoundError: If the proposal (joined to its organization) does not resolve
    """
    joined = await proposals.get_proposal_with_organization(session, proposal_id)
    if joined is None:
        raise NotFoundError("Proposal", proposal_id)
    proposal, organization = joined

    messages = await conversation.list_recent_chat_messages(session, proposal_id, message_limit)
    memory = await conversation.list_memory_entries(session, proposal_id, limit=memory_limit)
    document_count = await documents.count_documents(session, organization.id)

    logger.debug(
        f"[assemble_context] proposal_id={proposal_id} messages={len(messages)} "
        f"memory={len(memory)} documents={document_count}"
    )

    return ConversationContext(
        proposal_title=proposal.title,
        proposal_description=proposal.description,
        status=proposal.status,
        phase=proposal.phase,
        organization_name=organization.name,
        organization_description=organization.description,
        recent_messages=[ChatMessage.model_validate(row) for row in messages],
        recent_memory=[MemoryEntry.model_validate(row) for row in memory],
        document_count=document_count,
    )
