"""Models package - re-exports for convenience."""

from proposalcraft.models.assembly import ProposalDocument
from proposalcraft.models.common import (
    FileType,
    MemoryType,
    MessageRole,
    MessageType,
    ProposalPhase,
    ProposalStatus,
    UploadStatus,
)
from proposalcraft.models.context import ConversationContext
from proposalcraft.models.entities import (
    ChatMessage,
    Document,
    MemoryEntry,
    Organization,
    Proposal,
    ProposalUpdate,
    Section,
    SectionUpdate,
    User,
)

__all__ = [
    "ChatMessage",
    "ConversationContext",
    "Document",
    "FileType",
    "MemoryEntry",
    "MemoryType",
    "MessageRole",
    "MessageType",
    "Organization",
    "Proposal",
    "ProposalDocument",
    "ProposalPhase",
    "ProposalStatus",
    "ProposalUpdate",
    "Section",
    "SectionUpdate",
    "UploadStatus",
    "User",
]
