"""Proposal document assembly from completed sections."""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from proposalcraft.db import proposals
from proposalcraft.errors import NotFoundError
from proposalcraft.models.assembly import ProposalDocument
from proposalcraft.models.entities import Section


def count_words(content: str | None) -> int:
    """Count whitespace-delimited tokens; None counts as zero."""
    if not content:
        return 0
    return len(content.split())


async def assemble_document(session: AsyncSession, proposal_id: int) -> ProposalDocument:
    """Stitch a proposal's completed sections into a document.

    Only sections marked completed are included, ordered by order_index
    ascending. The word count covers the included sections only.

    Args:
        session: Database session
        proposal_id: Proposal to assemble

    Returns:
        ProposalDocument with title, sections, generation time and word count

    Raises:
        NotFoundError: If the proposal does not exist
    """
    proposal = await proposals.get_proposal(session, proposal_id)
    if proposal is None:
        raise NotFoundError("Proposal", proposal_id)

    rows = await proposals.list_sections(session, proposal_id, completed_only=True)
    sections = [Section.model_validate(row) for row in rows]

    return ProposalDocument(
        title=proposal.title,
        sections=sections,
        generated_at=datetime.utcnow(),
        word_count=sum(count_words(section.content) for section in sections),
    )
