"""Assembled proposal document model."""

from datetime import datetime

from pydantic import BaseModel

from proposalcraft.models.entities import Section


class ProposalDocument(BaseModel):
    """Completed sections of a proposal stitched into one document."""

    title: str
    sections: list[Section]
    generated_at: datetime
    word_count: int
