"""Conversation context handed to the response synthesizer."""

from pydantic import BaseModel, Field

from proposalcraft.models.common import ProposalPhase, ProposalStatus
from proposalcraft.models.entities import ChatMessage, MemoryEntry


class ConversationContext(BaseModel):
    """Everything a reply may depend on, gathered in one read pass."""

    proposal_title: str
    proposal_description: str | None = None
    status: ProposalStatus
    phase: ProposalPhase
    organization_name: str | None = None
    organization_description: str | None = None
    # Chronological, oldest first
    recent_messages: list[ChatMessage] = Field(default_factory=list)
    # Newest first
    recent_memory: list[MemoryEntry] = Field(default_factory=list)
    document_count: int = Field(0, ge=0)
