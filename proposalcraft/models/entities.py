"""Entity domain models returned by core operations."""

from datetime import datetime
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from proposalcraft.models.common import (
    FileType,
    MemoryType,
    MessageRole,
    MessageType,
    ProposalPhase,
    ProposalStatus,
    UploadStatus,
)


class EntityModel(BaseModel):
    """Base for models built from ORM rows."""

    model_config = ConfigDict(from_attributes=True)


class User(EntityModel):
    """Account owning organizations and proposals."""

    id: int
    email: str
    full_name: str
    created_at: datetime
    updated_at: datetime


class Organization(EntityModel):
    """Organization owned by exactly one user."""

    id: int
    user_id: int
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class Document(EntityModel):
    """Registered document; status advances outside the core."""

    id: int
    organization_id: int
    filename: str
    file_path: str
    file_type: FileType
    file_size: int
    upload_status: UploadStatus
    created_at: datetime
    updated_at: datetime


class Proposal(EntityModel):
    """Proposal with independent status and phase axes."""

    id: int
    user_id: int
    organization_id: int
    title: str
    description: str | None = None
    status: ProposalStatus
    phase: ProposalPhase
    created_at: datetime
    updated_at: datetime


class Section(EntityModel):
    """Ordered content block within a proposal."""

    id: int
    proposal_id: int
    title: str
    content: str | None = None
    order_index: int
    is_completed: bool
    created_at: datetime
    updated_at: datetime


class ChatMessage(EntityModel):
    """One immutable conversational turn."""

    id: int
    proposal_id: int
    role: MessageRole
    content: str
    message_type: MessageType
    created_at: datetime


class MemoryEntry(EntityModel):
    """Immutable note accumulated over a proposal's life."""

    id: int
    proposal_id: int
    memory_type: MemoryType
    content: str
    source: str | None = None
    created_at: datetime


class PartialUpdate(BaseModel):
    """Partial update. Only fields explicitly set are applied."""

    # Fields that may be explicitly cleared with None
    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_null_required(self) -> "PartialUpdate":
        for name in self.model_fields_set:
            if getattr(self, name) is None and name not in self.nullable_fields:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Explicitly set fields as plain JSON-compatible values."""
        return self.model_dump(exclude_unset=True, mode="json")


class ProposalUpdate(PartialUpdate):
    """Partial proposal update."""

    nullable_fields: ClassVar[frozenset[str]] = frozenset({"description"})

    title: str | None = Field(None, min_length=1)
    description: str | None = None
    status: ProposalStatus | None = None
    phase: ProposalPhase | None = None


class SectionUpdate(PartialUpdate):
    """Partial section update."""

    nullable_fields: ClassVar[frozenset[str]] = frozenset({"content"})

    title: str | None = Field(None, min_length=1)
    content: str | None = None
    order_index: int | None = None
    is_completed: bool | None = None
