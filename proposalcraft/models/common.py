"""Enums shared across all models."""

from enum import Enum


class ProposalStatus(str, Enum):
    """Proposal status. Any status may follow any other."""

    planning = "planning"
    drafting = "drafting"
    completed = "completed"
    archived = "archived"


class ProposalPhase(str, Enum):
    """Proposal working phase, independent of status."""

    planning = "planning"
    drafting = "drafting"


class FileType(str, Enum):
    """Accepted document file types."""

    pdf = "pdf"
    docx = "docx"
    doc = "doc"


class UploadStatus(str, Enum):
    """Document ingestion status."""

    pending = "pending"
    processing = "processing"
    completed = "completed"
    failed = "failed"


class MessageRole(str, Enum):
    """Chat message author."""

    user = "user"
    assistant = "assistant"


class MessageType(str, Enum):
    """Functional message type; selects the reply rule set."""

    chat = "chat"
    planning = "planning"
    feedback = "feedback"


class MemoryType(str, Enum):
    """Kind of assistant memory note."""

    organization_info = "organization_info"
    user_feedback = "user_feedback"
    document_insights = "document_insights"
    planning_notes = "planning_notes"
